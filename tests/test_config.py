import pytest

from core.config import DEFAULT_CONFIG, MotionConfig, load_config
from core.errors import ValidationError


def test_defaults():
    assert DEFAULT_CONFIG.button_touch_threshold == 0.05
    assert DEFAULT_CONFIG.axis_touch_threshold == 0.1
    assert DEFAULT_CONFIG.default_profile_id == "generic-trigger"


def test_load_yaml(tmp_path):
    path = tmp_path / "motionbridge.yaml"
    path.write_text("button_touch_threshold: 0.2\naxis_touch_threshold: 0.25\nprofiles_base: https://cdn.example.test/profiles\n")
    cfg = load_config(str(path))
    assert cfg.button_touch_threshold == 0.2
    assert cfg.axis_touch_threshold == 0.25
    assert cfg.profiles_base == "https://cdn.example.test/profiles"
    assert cfg.hz == 60


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("trigger_threshold: 0.3\n")
    with pytest.raises(ValidationError):
        load_config(str(path))


@pytest.mark.parametrize("value", [-0.1, 1.0, "high"])
def test_threshold_range_enforced(value):
    with pytest.raises(ValidationError):
        MotionConfig(axis_touch_threshold=value)


def test_overrides_skip_none():
    cfg = DEFAULT_CONFIG.with_overrides(hz=None, profiles_base="/srv/profiles")
    assert cfg.hz == DEFAULT_CONFIG.hz
    assert cfg.profiles_base == "/srv/profiles"


@pytest.mark.parametrize("value", ["60", 0, -5, 30.5, True])
def test_hz_must_be_positive_integer(value):
    with pytest.raises(ValidationError):
        MotionConfig(hz=value)


def test_quoted_hz_in_yaml_rejected(tmp_path):
    path = tmp_path / "motionbridge.yaml"
    path.write_text('hz: "60"\n')
    with pytest.raises(ValidationError):
        load_config(str(path))


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        MotionConfig(timeout=0)
