"""Mock gamepad and input source built from a profile layout

Used to preview a profile without hardware: the buttons and axes lists are
sized from the highest index the layout's gamepad mapping uses, and every
control starts at rest. Tests and the `--mock` CLI mode poke values directly.
"""
import logging
from typing import List, Optional

from core.errors import ConfigurationError, ValidationError
from core.profile import Profile
from core.reader import InputSource
from core.state import GamepadButton, GamepadSnapshot, Handedness

LOG = logging.getLogger("motionbridge.mock")


class MockGamepad(GamepadSnapshot):
    def __init__(self, profile: Profile, handedness: Handedness):
        if profile is None:
            raise ValidationError("no profile supplied")
        if not handedness:
            raise ValidationError("no handedness supplied")
        layout = profile.layout_for(handedness)
        if layout is None:
            raise ConfigurationError(f"profile {profile.profile_id} has no layout for {handedness}")

        mapping = layout.gamepad_mapping
        super().__init__(
            buttons=[GamepadButton() for _ in mapping.buttons],
            axes=[0.0 for _ in mapping.axes],
            id=profile.profile_id,
            mapping=mapping.mapping,
        )
        LOG.debug("mock gamepad %s: %d buttons, %d axes", self.id, len(self.buttons), len(self.axes))

    def set_button(self, index: int, value: float, touched: bool = None, pressed: bool = None):
        button = self.buttons[index]
        button.value = value
        button.touched = value > 0 if touched is None else touched
        button.pressed = value >= 1 if pressed is None else pressed

    def set_axis(self, index: int, value: float):
        self.axes[index] = value

    def reset(self):
        for button in self.buttons:
            button.value, button.touched, button.pressed = 0.0, False, False
        self.axes = [0.0 for _ in self.axes]


class MockInputSource(InputSource):
    def __init__(self, gamepad: Optional[GamepadSnapshot], handedness: Handedness, profiles: List[str] = None):
        if not handedness:
            raise ValidationError("no handedness supplied")
        self._gamepad = gamepad
        self._handedness = Handedness(handedness)
        if profiles is None:
            profiles = [gamepad.id] if gamepad is not None and gamepad.id else []
        self._profiles = tuple(profiles)

    @classmethod
    def from_profile(cls, profile: Profile, handedness: Handedness) -> "MockInputSource":
        return cls(MockGamepad(profile, handedness), handedness)

    @property
    def profiles(self):
        return list(self._profiles)

    @property
    def handedness(self) -> Handedness:
        return self._handedness

    @property
    def gamepad(self) -> Optional[GamepadSnapshot]:
        return self._gamepad

    def disconnect(self):
        self._gamepad = None
