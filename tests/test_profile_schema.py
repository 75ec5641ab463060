import pytest

from core.errors import ValidationError
from core.profile import Profile, validate_profile
from core.state import Handedness

from conftest import make_layout, make_profile_doc


def test_parses_layouts_and_mapping(profile_doc):
    profile = Profile.from_dict(profile_doc)
    assert profile.profile_id == "test-controller"
    assert profile.fallback_profile_ids == ("generic-trigger",)
    assert profile.handedness_values == [Handedness.LEFT, Handedness.RIGHT]
    layout = profile.layout_for("right")
    assert layout.asset_path == "right.glb"
    assert layout.gamepad_mapping.mapping == "xr-standard"
    assert layout.gamepad_mapping.axes[2].component_id == "xr-standard-thumbstick"
    assert layout.gamepad_mapping.axes[0] is None


@pytest.mark.parametrize("keys", [("none",), ("left", "right", "none"), ("left-right",), ("left-right-none",)])
def test_accepts_every_handedness_arrangement(keys):
    validate_profile(make_profile_doc(handedness=keys))


@pytest.mark.parametrize("keys", [("left",), ("left", "none"), ("left-right", "none"), ("left-right", "left")])
def test_rejects_mixed_handedness_arrangements(keys):
    with pytest.raises(ValidationError):
        validate_profile(make_profile_doc(handedness=keys))


@pytest.mark.parametrize("profile_id", ["generic", "Generic-Trigger", "generic_trigger", "-trigger"])
def test_rejects_bad_profile_ids(profile_id):
    with pytest.raises(ValidationError):
        validate_profile(make_profile_doc(profile_id=profile_id))


def test_rejects_duplicate_fallback_ids(profile_doc):
    profile_doc["fallbackProfileIds"] = ["generic-trigger", "generic-trigger"]
    with pytest.raises(ValidationError):
        validate_profile(profile_doc)


def test_rejects_visibility_without_state_source(profile_doc):
    responses = profile_doc["layouts"]["left"]["components"]["xr-standard-trigger"]["visualResponses"]
    responses[0]["property"] = "visibility"
    with pytest.raises(ValidationError):
        validate_profile(profile_doc)


def test_rejects_layout_without_gamepad_block(profile_doc):
    del profile_doc["layouts"]["left"]["gamepad"]
    with pytest.raises(ValidationError):
        validate_profile(profile_doc)


def test_rejects_bad_axis_mapping(profile_doc):
    profile_doc["layouts"]["left"]["gamepad"]["axes"][2] = {"componentId": "xr-standard-thumbstick", "axis": "zAxis"}
    with pytest.raises(ValidationError):
        validate_profile(profile_doc)


def test_rejects_blank_component_id():
    layout = make_layout()
    layout["components"][" "] = layout["components"].pop("xr-standard-trigger")
    doc = {"profileId": "test-controller", "layouts": {"none": layout}}
    with pytest.raises(ValidationError):
        validate_profile(doc)


def test_layout_for_prefers_exact_key():
    doc = make_profile_doc(handedness=("left", "right", "none"))
    doc["layouts"]["none"]["assetPath"] = "none.glb"
    profile = Profile.from_dict(doc)
    assert profile.layout_for(Handedness.NONE).asset_path == "none.glb"
    assert profile.layout_for(Handedness.LEFT).asset_path == "left.glb"


def test_handedness_covers():
    assert Handedness.LEFT_RIGHT.covers(Handedness.LEFT)
    assert not Handedness.LEFT_RIGHT.covers(Handedness.NONE)
    assert Handedness.LEFT_RIGHT_NONE.covers(Handedness.NONE)
    assert not Handedness.LEFT.covers(Handedness.RIGHT)
