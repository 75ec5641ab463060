"""Scene binding: locate the named nodes each visual response drives

The scene graph itself belongs to the renderer. Callers pass a
`lookup(parent, name)` function returning the child node called `name` under
`parent` (or None); `find_nodes` uses it once after a model loads and
`iter_node_updates` then pairs the bound nodes with fresh weights every frame.

A component whose root node is missing, or a response whose nodes are missing,
is logged and skipped; the rest of the controller keeps animating.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from core.errors import NotFoundError
from core.state import ComponentType, Property

LOG = logging.getLogger("motionbridge.scene")

Lookup = Callable[[Any, str], Optional[Any]]


@dataclass
class ResponseNodes:
    root: Any
    target: Any
    min: Any = None
    max: Any = None


@dataclass
class NodeUpdate:
    component_id: str
    root_node_name: str
    property: Property
    nodes: ResponseNodes
    value: Union[float, bool]


@dataclass
class NodeBindings:
    nodes: Dict[str, Dict[str, ResponseNodes]]
    errors: List[NotFoundError]


def find_nodes(controller, model_root, lookup: Lookup) -> NodeBindings:
    bound: Dict[str, Dict[str, ResponseNodes]] = {}
    errors: List[NotFoundError] = []

    def missing(message):
        LOG.warning(message)
        errors.append(NotFoundError(message))

    for component in controller.components.values():
        component_root = lookup(model_root, component.root_node_name)
        if component_root is None:
            missing(f"could not find root node of component {component.root_node_name}")
            continue

        component_nodes = {}
        for response in component.visual_responses.values():
            desc = response.description
            if desc.root_node_name == component.root_node_name:
                root = component_root
            else:
                root = lookup(component_root, desc.root_node_name)
            if root is None:
                missing(f"could not find root node of visual response {desc.root_node_name}")
                continue

            target = lookup(root, desc.target_node_name)
            if target is None:
                missing(f"could not find target node {desc.target_node_name} of visual response {desc.root_node_name}")
                continue

            nodes = ResponseNodes(root=root, target=target)
            if desc.property is Property.TRANSFORM:
                nodes.min = lookup(root, desc.min_node_name)
                nodes.max = lookup(root, desc.max_node_name)
                if nodes.min is None or nodes.max is None:
                    missing(f"could not find extents nodes of visual response {desc.root_node_name}")
                    continue
            component_nodes[desc.root_node_name] = nodes

        bound[component.id] = component_nodes

    return NodeBindings(nodes=bound, errors=errors)


def find_touch_points(controller, model_root, lookup: Lookup) -> Dict[str, Any]:
    """Touch point nodes of every touchpad component, keyed by component id."""
    points = {}
    for component in controller.components.values():
        if component.type is not ComponentType.TOUCHPAD or not component.touch_point_node_name:
            continue
        component_root = lookup(model_root, component.root_node_name)
        node = lookup(component_root, component.touch_point_node_name) if component_root is not None else None
        if node is None:
            LOG.warning("could not find touch point %s in touchpad component %s",
                        component.touch_point_node_name, component.id)
            continue
        points[component.id] = node
    return points


def iter_node_updates(controller, bindings: NodeBindings) -> Iterator[NodeUpdate]:
    for component in controller.components.values():
        component_nodes = bindings.nodes.get(component.id)
        # missing nodes were reported when binding
        if not component_nodes:
            continue
        for root_name, response in component.visual_responses.items():
            nodes = component_nodes.get(root_name)
            if nodes is None:
                continue
            yield NodeUpdate(component.id, root_name, response.description.property, nodes, response.value)
