import pytest

from core.errors import ConfigurationError, ValidationError
from core.state import Handedness
from devices import pygame_gamepad
from devices.mock_gamepad import MockGamepad, MockInputSource
from devices.pygame_gamepad import PygameInputSource


def test_mock_gamepad_sized_from_layout(profile):
    gamepad = MockGamepad(profile, "left")
    assert len(gamepad.buttons) == 4
    assert len(gamepad.axes) == 4
    assert gamepad.id == "test-controller"
    assert gamepad.mapping == "xr-standard"


def test_mock_gamepad_requires_layout(profile):
    with pytest.raises(ConfigurationError):
        MockGamepad(profile, "none")
    with pytest.raises(ValidationError):
        MockGamepad(profile, None)


def test_mock_gamepad_set_and_reset(profile):
    gamepad = MockGamepad(profile, "left")
    gamepad.set_button(0, 1.0)
    gamepad.set_axis(3, -0.5)
    assert gamepad.buttons[0].pressed and gamepad.buttons[0].touched
    assert gamepad.axes[3] == -0.5
    gamepad.reset()
    assert not gamepad.buttons[0].pressed
    assert gamepad.axes == [0.0, 0.0, 0.0, 0.0]


def test_mock_input_source(profile):
    source = MockInputSource.from_profile(profile, "right")
    assert source.profiles == ["test-controller"]
    assert source.handedness is Handedness.RIGHT
    source.disconnect()
    assert source.gamepad is None


class FakeJoystick:
    def __init__(self, axes, buttons, name="Fake Pad"):
        self.axes = axes
        self.buttons = buttons
        self.name = name

    def get_name(self):
        return self.name

    def get_numaxes(self):
        return len(self.axes)

    def get_axis(self, i):
        return self.axes[i]

    def get_numbuttons(self):
        return len(self.buttons)

    def get_button(self, i):
        return self.buttons[i]


def test_pygame_snapshot_folds_analog_trigger():
    source = PygameInputSource(["vendor-pad"], "left", analog_buttons={0: 2})
    snapshot = source._read(FakeJoystick(axes=[0.1, -0.2, 0.0], buttons=[0, 1]))
    assert snapshot.axes == [0.1, -0.2, 0.0]
    assert snapshot.buttons[0].value == 0.5
    assert not snapshot.buttons[0].pressed
    assert snapshot.buttons[1].value == 1.0
    assert snapshot.buttons[1].pressed
    assert snapshot.id == "Fake Pad"


def test_pygame_source_without_joystick(monkeypatch):
    source = PygameInputSource(["vendor-pad"], "right")
    monkeypatch.setattr(source, "_find_joystick", lambda: None)
    assert source.gamepad is None
    assert source.profiles == ["vendor-pad"]
    assert source.handedness is Handedness.RIGHT


def test_pygame_source_reads_found_joystick(monkeypatch):
    source = PygameInputSource(["vendor-pad"])
    monkeypatch.setattr(source, "_find_joystick", lambda: FakeJoystick(axes=[0.5], buttons=[1]))
    monkeypatch.setattr(pygame_gamepad.pygame.event, "pump", lambda: None)
    snapshot = source.gamepad
    assert snapshot.axes == [0.5]
    assert snapshot.buttons[0].pressed
