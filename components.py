"""Components: one physical control and its derived state"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Union

from core.config import DEFAULT_CONFIG, MotionConfig
from core.errors import ValidationError
from core.state import ComponentState, ComponentType, ComponentValues, GamepadIndices, GamepadSnapshot
from visual_response import VisualResponse

LOG = logging.getLogger("motionbridge.components")


def _clamp(val: float, low: float, high: float) -> float:
    val = float(val)
    # NaN and infinities read as a resting control
    if not math.isfinite(val):
        return 0.0
    return max(low, min(high, val))


@dataclass(frozen=True)
class ComponentDescription:
    type: Union[ComponentType, str]
    root_node_name: Optional[str]
    gamepad_indices: GamepadIndices
    label_anchor_node_name: Optional[str] = None
    touch_point_node_name: Optional[str] = None

    @classmethod
    def from_dict(cls, component_id: str, data: dict) -> "ComponentDescription":
        raw_type = data.get("type")
        try:
            ctype = ComponentType(raw_type)
        except ValueError:
            LOG.debug("component %s has unrecognized type %r", component_id, raw_type)
            ctype = raw_type
        return cls(
            type=ctype,
            root_node_name=data.get("rootNodeName"),
            gamepad_indices=GamepadIndices.from_dict(data["gamepadIndices"]),
            label_anchor_node_name=data.get("labelAnchorNodeName"),
            touch_point_node_name=data.get("touchPointNodeName"),
        )


class Component:
    def __init__(self, component_id: str, description: dict, config: MotionConfig = DEFAULT_CONFIG):
        if (not component_id
                or not description
                or description.get("visualResponses") is None
                or not description.get("gamepadIndices")):
            raise ValidationError(f"invalid arguments for component {component_id!r}")

        self.id = component_id
        self.config = config
        self.description = ComponentDescription.from_dict(component_id, description)
        if self.description.gamepad_indices.is_empty():
            raise ValidationError(f"component {component_id} maps no button or axis")

        # a failing response aborts the whole component
        self.visual_responses: Dict[str, VisualResponse] = {}
        for vr_description in description["visualResponses"]:
            response = VisualResponse(vr_description)
            self.visual_responses[response.root_node_name] = response

        indices = self.description.gamepad_indices
        self.values = ComponentValues(
            state=ComponentState.DEFAULT,
            button=0.0 if indices.button is not None else None,
            x_axis=0.0 if indices.x_axis is not None else None,
            y_axis=0.0 if indices.y_axis is not None else None,
        )

    @property
    def type(self):
        return self.description.type

    @property
    def root_node_name(self):
        return self.description.root_node_name

    @property
    def label_anchor_node_name(self):
        return self.description.label_anchor_node_name

    @property
    def touch_point_node_name(self):
        return self.description.touch_point_node_name

    @property
    def gamepad_indices(self) -> GamepadIndices:
        return self.description.gamepad_indices

    @property
    def data(self) -> dict:
        return {"id": self.id, **self.values.as_dict()}

    def update_from_gamepad(self, gamepad: GamepadSnapshot):
        """Poll the gamepad and refresh values, state and visual response weights.

        All device reads happen before any value is stored, so an IndexError
        from a short buttons/axes list leaves the previous tick's values intact.
        """
        indices = self.description.gamepad_indices
        button = gamepad.buttons[indices.button] if indices.button is not None else None
        x_axis = gamepad.axes[indices.x_axis] if indices.x_axis is not None else None
        y_axis = gamepad.axes[indices.y_axis] if indices.y_axis is not None else None

        state = ComponentState.DEFAULT

        if button is not None:
            value = _clamp(button.value, 0.0, 1.0)
            self.values.button = value
            if button.pressed or value == 1.0:
                state = ComponentState.PRESSED
            elif button.touched or value > self.config.button_touch_threshold:
                state = ComponentState.TOUCHED

        # an axis can only promote default to touched, never override the button
        if x_axis is not None:
            self.values.x_axis = _clamp(x_axis, -1.0, 1.0)
            if state is ComponentState.DEFAULT and abs(self.values.x_axis) > self.config.axis_touch_threshold:
                state = ComponentState.TOUCHED

        if y_axis is not None:
            self.values.y_axis = _clamp(y_axis, -1.0, 1.0)
            if state is ComponentState.DEFAULT and abs(self.values.y_axis) > self.config.axis_touch_threshold:
                state = ComponentState.TOUCHED

        self.values.state = state

        for response in self.visual_responses.values():
            response.update_from_component(self.values)

    def __repr__(self):
        return f"Component({self.id!r}, {self.values.as_dict()})"
