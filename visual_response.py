"""Visual responses: turn a component's values into one presentation weight

A visual response drives a single node of the controller model. Transform
responses produce a weight in [0, 1] that the renderer uses to interpolate the
target node between its MIN and MAX extents; visibility responses produce a
boolean.
"""
import logging
import math
from dataclasses import dataclass
from typing import Tuple, Union

from core.errors import ValidationError
from core.state import ComponentState, ComponentValues, Property, Source

LOG = logging.getLogger("motionbridge.visual_response")

# Values a component reports before the first device poll.
RESTING_VALUES = ComponentValues(state=ComponentState.DEFAULT, button=0.0, x_axis=0.0, y_axis=0.0)


@dataclass(frozen=True)
class VisualResponseDescription:
    root_node_name: str
    source: Source
    states: Tuple[ComponentState, ...]
    property: Property = Property.TRANSFORM
    target_node_name: str = "VALUE"
    min_node_name: str = "MIN"
    max_node_name: str = "MAX"

    @classmethod
    def from_dict(cls, data: dict) -> "VisualResponseDescription":
        if not isinstance(data, dict):
            raise ValidationError(f"visual response description must be a mapping, got {data!r}")
        root = data.get("rootNodeName")
        if not root:
            raise ValidationError("visual response is missing rootNodeName")
        if not data.get("source"):
            raise ValidationError(f"visual response {root} is missing source")
        if not data.get("states"):
            raise ValidationError(f"visual response {root} needs at least one state")
        try:
            source = Source(data["source"])
            states = tuple(ComponentState(s) for s in data["states"])
            prop = Property(data.get("property", Property.TRANSFORM.value))
        except ValueError as e:
            raise ValidationError(f"visual response {root}: {e}") from e
        if prop is Property.VISIBILITY and source is not Source.STATE:
            raise ValidationError(
                f"visual response {root}: visibility requires source 'state', got {source.value!r}"
            )
        return cls(
            root_node_name=root,
            source=source,
            states=states,
            property=prop,
            target_node_name=data.get("targetNodeName", "VALUE"),
            min_node_name=data.get("minNodeName", "MIN"),
            max_node_name=data.get("maxNodeName", "MAX"),
        )


def normalize_axes(x_axis: float, y_axis: float) -> Tuple[float, float]:
    """Circular clamp: confine (x, y) to the unit disk, then map each axis to [0, 1].

    A vector longer than 1 is shrunk onto the unit circle keeping its
    direction, so a diagonal deflection never travels further than an
    axis-aligned one.
    """
    magnitude = math.sqrt(x_axis * x_axis + y_axis * y_axis)
    if magnitude > 1:
        x_axis /= magnitude
        y_axis /= magnitude
    return (x_axis + 1) / 2, (y_axis + 1) / 2


class VisualResponse:
    def __init__(self, description: dict):
        self.description = VisualResponseDescription.from_dict(description)
        self.value: Union[float, bool] = 0
        self.update_from_component(RESTING_VALUES)

    @property
    def root_node_name(self) -> str:
        return self.description.root_node_name

    @property
    def target_node_name(self) -> str:
        return self.description.target_node_name

    def update_from_component(self, values: ComponentValues):
        desc = self.description
        active = values.state in desc.states

        if desc.source is Source.STATE:
            if desc.property is Property.VISIBILITY:
                self.value = active
            else:
                self.value = 1 if active else 0
        elif desc.source is Source.BUTTON:
            self.value = (values.button or 0.0) if active else 0
        elif not active:
            # axes rest at the center of their travel, not at MIN
            self.value = 0.5
        else:
            x_value, y_value = normalize_axes(values.x_axis or 0.0, values.y_axis or 0.0)
            self.value = x_value if desc.source is Source.X_AXIS else y_value

    def __repr__(self):
        return f"VisualResponse({self.root_node_name!r}, source={self.description.source.value}, value={self.value!r})"
