import copy
import json
from pathlib import Path

import pytest

REPO_PROFILES = Path(__file__).resolve().parent.parent / "profiles"

THUMBSTICK = {
    "type": "thumbstick",
    "rootNodeName": "thumbstick",
    "visualResponses": [
        {"rootNodeName": "thumbstick_pressed", "source": "button", "states": ["pressed"]},
        {"rootNodeName": "thumbstick_xaxis", "source": "xAxis", "states": ["default", "touched", "pressed"]},
        {"rootNodeName": "thumbstick_yaxis", "source": "yAxis", "states": ["default", "touched", "pressed"]},
        {"rootNodeName": "thumbstick_touch", "source": "state", "states": ["touched", "pressed"],
         "property": "visibility"},
    ],
}

TRIGGER = {
    "type": "trigger",
    "rootNodeName": "trigger",
    "visualResponses": [
        {"rootNodeName": "trigger_pressed", "source": "button", "states": ["default", "touched", "pressed"]},
    ],
}


def make_layout(asset_path=None):
    layout = {
        "selectComponentId": "xr-standard-trigger",
        "components": {
            "xr-standard-trigger": copy.deepcopy(TRIGGER),
            "xr-standard-thumbstick": copy.deepcopy(THUMBSTICK),
        },
        "gamepad": {
            "mapping": "xr-standard",
            "buttons": ["xr-standard-trigger", None, None, "xr-standard-thumbstick"],
            "axes": [
                None,
                None,
                {"componentId": "xr-standard-thumbstick", "axis": "xAxis"},
                {"componentId": "xr-standard-thumbstick", "axis": "yAxis"},
            ],
        },
    }
    if asset_path:
        layout["assetPath"] = asset_path
    return layout


def make_profile_doc(profile_id="test-controller", handedness=("left", "right")):
    return {
        "profileId": profile_id,
        "fallbackProfileIds": ["generic-trigger"],
        "layouts": {h: make_layout(f"{h}.glb") for h in handedness},
    }


@pytest.fixture
def profile_doc():
    return make_profile_doc()


@pytest.fixture
def profile(profile_doc):
    from core.profile import Profile
    return Profile.from_dict(profile_doc)


@pytest.fixture
def repo_dir(tmp_path):
    """A local profile repository holding only generic-trigger and test-controller."""
    (tmp_path / "generic-trigger").mkdir()
    (tmp_path / "test-controller").mkdir()
    generic = json.loads((REPO_PROFILES / "generic-trigger" / "profile.json").read_text())
    (tmp_path / "generic-trigger" / "profile.json").write_text(json.dumps(generic))
    (tmp_path / "test-controller" / "profile.json").write_text(json.dumps(make_profile_doc()))
    (tmp_path / "profilesList.json").write_text(json.dumps({
        "generic-trigger": {"path": "generic-trigger/profile.json", "deprecated": False},
        "test-controller": "test-controller/profile.json",
    }))
    return tmp_path


@pytest.fixture
def anyio_backend():
    return "asyncio"
