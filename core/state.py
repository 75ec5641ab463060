"""State models and lightweight DTOs"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Handedness(str, Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    LEFT_RIGHT = "left-right"
    LEFT_RIGHT_NONE = "left-right-none"

    def covers(self, other: "Handedness") -> bool:
        """True when a layout keyed by this value applies to `other`."""
        if self is other:
            return True
        if self is Handedness.LEFT_RIGHT:
            return other in (Handedness.LEFT, Handedness.RIGHT)
        if self is Handedness.LEFT_RIGHT_NONE:
            return other in (Handedness.LEFT, Handedness.RIGHT, Handedness.NONE)
        return False


# Layout keys a profile may declare; exactly one arrangement per profile.
HANDEDNESS_ARRANGEMENTS = (
    frozenset({"none"}),
    frozenset({"left", "right"}),
    frozenset({"left", "right", "none"}),
    frozenset({"left-right"}),
    frozenset({"left-right-none"}),
)


class ComponentState(str, Enum):
    DEFAULT = "default"
    TOUCHED = "touched"
    PRESSED = "pressed"


class ComponentType(str, Enum):
    TRIGGER = "trigger"
    SQUEEZE = "squeeze"
    TOUCHPAD = "touchpad"
    THUMBSTICK = "thumbstick"
    BUTTON = "button"


class Source(str, Enum):
    BUTTON = "button"
    X_AXIS = "xAxis"
    Y_AXIS = "yAxis"
    STATE = "state"


class Property(str, Enum):
    TRANSFORM = "transform"
    VISIBILITY = "visibility"


@dataclass
class GamepadIndices:
    button: Optional[int] = None
    x_axis: Optional[int] = None
    y_axis: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "GamepadIndices":
        return cls(button=data.get("button"), x_axis=data.get("xAxis"), y_axis=data.get("yAxis"))

    def as_dict(self) -> Dict[str, int]:
        out = {}
        if self.button is not None:
            out["button"] = self.button
        if self.x_axis is not None:
            out["xAxis"] = self.x_axis
        if self.y_axis is not None:
            out["yAxis"] = self.y_axis
        return out

    def is_empty(self) -> bool:
        return self.button is None and self.x_axis is None and self.y_axis is None


@dataclass
class ComponentValues:
    state: ComponentState = ComponentState.DEFAULT
    button: Optional[float] = None  # 0..1
    x_axis: Optional[float] = None  # -1..1
    y_axis: Optional[float] = None  # -1..1

    def as_dict(self) -> dict:
        out = {"state": self.state.value}
        if self.button is not None:
            out["button"] = self.button
        if self.x_axis is not None:
            out["xAxis"] = self.x_axis
        if self.y_axis is not None:
            out["yAxis"] = self.y_axis
        return out


@dataclass
class GamepadButton:
    value: float = 0.0
    touched: bool = False
    pressed: bool = False


@dataclass
class GamepadSnapshot:
    buttons: List[GamepadButton] = field(default_factory=list)
    axes: List[float] = field(default_factory=list)
    id: str = ""
    mapping: str = ""
