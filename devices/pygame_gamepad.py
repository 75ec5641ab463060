"""Gamepad input source backed by pygame.joystick

Polls a joystick once per frame and returns a GamepadSnapshot. pygame reports
digital buttons only; analog triggers show up as axes in -1..1 and can be
folded into button values with `analog_buttons={button_index: axis_index}`.
"""
import logging
import os
import time
from typing import Dict, List, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

try:
    import pygame
except ImportError:
    pygame = None

from core.reader import InputSource
from core.state import GamepadButton, GamepadSnapshot, Handedness

LOG = logging.getLogger("motionbridge.gamepad")

RECONNECT_INTERVAL = 1.0  # seconds between joystick scans


class PygameInputSource(InputSource):
    def __init__(self, profiles: List[str], handedness: Handedness = Handedness.NONE,
                 joystick_index: int = None, name_hint: str = None,
                 analog_buttons: Dict[int, int] = None):
        self._profiles = list(profiles)
        self._handedness = Handedness(handedness)
        self.joystick_index = joystick_index
        self.name_hint = name_hint
        self.analog_buttons = dict(analog_buttons or {})
        self._joystick = None
        self._last_scan = None

    @property
    def profiles(self):
        return list(self._profiles)

    @property
    def handedness(self) -> Handedness:
        return self._handedness

    def _find_joystick(self):
        if pygame is None:
            LOG.warning("pygame not available — PygameInputSource disabled")
            return None
        pygame.init()
        pygame.joystick.init()
        for i in range(pygame.joystick.get_count()):
            if self.joystick_index is not None and i != self.joystick_index:
                continue
            js = pygame.joystick.Joystick(i)
            js.init()
            name = js.get_name() or ""
            if self.name_hint and self.name_hint.lower() not in name.lower():
                continue
            LOG.info("Found joystick: %s (index %d, axes=%d, buttons=%d)",
                     name, i, js.get_numaxes(), js.get_numbuttons())
            return js
        LOG.warning("No matching joystick found via pygame")
        return None

    def _read(self, js) -> GamepadSnapshot:
        axes = [float(js.get_axis(i)) for i in range(js.get_numaxes())]
        buttons = []
        for i in range(js.get_numbuttons()):
            pressed = bool(js.get_button(i))
            value = 1.0 if pressed else 0.0
            axis_index = self.analog_buttons.get(i)
            if axis_index is not None and axis_index < len(axes):
                value = max(value, (axes[axis_index] + 1.0) / 2.0)
            buttons.append(GamepadButton(value=value, touched=pressed, pressed=pressed))
        return GamepadSnapshot(buttons=buttons, axes=axes, id=js.get_name() or "", mapping="")

    @property
    def gamepad(self) -> Optional[GamepadSnapshot]:
        if self._joystick is None:
            now = time.monotonic()
            if self._last_scan is not None and now - self._last_scan < RECONNECT_INTERVAL:
                return None
            self._last_scan = now
            self._joystick = self._find_joystick()
            if self._joystick is None:
                return None
        try:
            pygame.event.pump()
            return self._read(self._joystick)
        except pygame.error:
            LOG.exception("error reading joystick; will attempt reconnect")
            self._joystick = None
            return None
