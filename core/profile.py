"""Profile data model and schema validation

A profile document is JSON (or YAML) shaped like:

  {
    "profileId": "generic-trigger",
    "fallbackProfileIds": [],
    "layouts": {
      "left-right-none": {
        "selectComponentId": "xr-standard-trigger",
        "components": {"xr-standard-trigger": {...}},
        "gamepad": {"mapping": "xr-standard", "buttons": ["xr-standard-trigger"], "axes": []},
        "assetPath": "none.glb"
      }
    },
    "assets": {"left-right-none": {"path": "generic-trigger/none.glb"}}
  }

Documents are validated once with jsonschema and parsed into frozen dataclasses.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import jsonschema
from jsonschema.exceptions import best_match

from core.errors import ValidationError
from core.state import HANDEDNESS_ARRANGEMENTS, Handedness

LOG = logging.getLogger("motionbridge.profile")

PROFILE_ID_PATTERN = "^[a-z0-9]+(-[a-z0-9]+)+$"

_NODE_NAME = {"type": "string", "minLength": 1}

VISUAL_RESPONSE_SCHEMA = {
    "type": "object",
    "required": ["rootNodeName", "source", "states"],
    "properties": {
        "rootNodeName": _NODE_NAME,
        "targetNodeName": _NODE_NAME,
        "minNodeName": _NODE_NAME,
        "maxNodeName": _NODE_NAME,
        "source": {"enum": ["button", "xAxis", "yAxis", "state"]},
        "states": {
            "type": "array",
            "minItems": 1,
            "uniqueItems": True,
            "items": {"enum": ["default", "touched", "pressed"]},
        },
        "property": {"enum": ["transform", "visibility"]},
    },
    # only a state-driven response may toggle visibility
    "if": {"properties": {"source": {"const": "state"}}},
    "else": {"properties": {"property": {"const": "transform"}}},
}

COMPONENT_SCHEMA = {
    "type": "object",
    "required": ["type", "rootNodeName", "visualResponses"],
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "rootNodeName": _NODE_NAME,
        "labelAnchorNodeName": _NODE_NAME,
        "touchPointNodeName": _NODE_NAME,
        "visualResponses": {"type": "array", "items": VISUAL_RESPONSE_SCHEMA},
    },
}

GAMEPAD_SCHEMA = {
    "type": "object",
    "required": ["mapping", "buttons", "axes"],
    "properties": {
        "mapping": {"type": "string"},
        "buttons": {"type": "array", "items": {"type": ["string", "null"]}},
        "axes": {
            "type": "array",
            "items": {
                "oneOf": [
                    {"type": "null"},
                    {
                        "type": "object",
                        "required": ["componentId", "axis"],
                        "properties": {
                            "componentId": {"type": "string", "minLength": 1},
                            "axis": {"enum": ["xAxis", "yAxis"]},
                        },
                        "additionalProperties": False,
                    },
                ]
            },
        },
    },
}

LAYOUT_SCHEMA = {
    "type": "object",
    "required": ["components", "gamepad"],
    "properties": {
        "selectComponentId": {"type": "string"},
        "components": {
            "type": "object",
            "minProperties": 1,
            "propertyNames": {"pattern": "\\S"},
            "additionalProperties": COMPONENT_SCHEMA,
        },
        "gamepad": GAMEPAD_SCHEMA,
        "assetPath": {"type": "string", "minLength": 1},
    },
}


def _arrangement(keys):
    keys = sorted(keys)
    return {
        "type": "object",
        "required": keys,
        "properties": {k: LAYOUT_SCHEMA for k in keys},
        "additionalProperties": False,
    }


PROFILE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["profileId", "layouts"],
    "properties": {
        "profileId": {"type": "string", "pattern": PROFILE_ID_PATTERN},
        "fallbackProfileIds": {
            "type": "array",
            "uniqueItems": True,
            "items": {"type": "string", "pattern": PROFILE_ID_PATTERN},
        },
        "layouts": {"oneOf": [_arrangement(keys) for keys in HANDEDNESS_ARRANGEMENTS]},
        "assets": {
            "type": "object",
            "propertyNames": {"enum": [h.value for h in Handedness]},
            "additionalProperties": {
                "type": "object",
                "required": ["path"],
                "properties": {"path": {"type": "string", "minLength": 1}},
            },
        },
    },
}

_VALIDATOR = jsonschema.Draft7Validator(PROFILE_SCHEMA)


@dataclass(frozen=True)
class AxisMapping:
    component_id: str
    axis: str  # "xAxis" | "yAxis"


@dataclass(frozen=True)
class GamepadMapping:
    mapping: str
    buttons: Tuple[Optional[str], ...] = ()
    axes: Tuple[Optional[AxisMapping], ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "GamepadMapping":
        axes = tuple(
            AxisMapping(a["componentId"], a["axis"]) if a is not None else None
            for a in data.get("axes", [])
        )
        return cls(mapping=data.get("mapping", ""), buttons=tuple(data.get("buttons", [])), axes=axes)


@dataclass(frozen=True)
class Layout:
    components: Dict[str, dict]
    gamepad_mapping: GamepadMapping
    asset_path: Optional[str] = None
    select_component_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Layout":
        return cls(
            components=dict(data["components"]),
            gamepad_mapping=GamepadMapping.from_dict(data["gamepad"]),
            asset_path=data.get("assetPath"),
            select_component_id=data.get("selectComponentId"),
        )


@dataclass(frozen=True)
class Profile:
    profile_id: str
    layouts: Dict[Handedness, Layout]
    fallback_profile_ids: Tuple[str, ...] = ()
    assets: Dict[Handedness, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: dict) -> "Profile":
        """Validate a profile document and build the frozen model."""
        validate_profile(doc)
        layouts = {Handedness(k): Layout.from_dict(v) for k, v in doc["layouts"].items()}
        assets = {Handedness(k): v["path"] for k, v in doc.get("assets", {}).items()}
        return cls(
            profile_id=doc["profileId"],
            layouts=layouts,
            fallback_profile_ids=tuple(doc.get("fallbackProfileIds", [])),
            assets=assets,
        )

    @property
    def handedness_values(self) -> List[Handedness]:
        return list(self.layouts)

    def _key_for(self, handedness: Handedness, keys) -> Optional[Handedness]:
        handedness = Handedness(handedness)
        if handedness in keys:
            return handedness
        for key in keys:
            if key.covers(handedness):
                return key
        return None

    def layout_for(self, handedness: Handedness) -> Optional[Layout]:
        """Exact layout key first, then a combined key that covers `handedness`."""
        key = self._key_for(handedness, self.layouts)
        return self.layouts[key] if key is not None else None

    def asset_for(self, handedness: Handedness) -> Optional[str]:
        key = self._key_for(handedness, self.assets)
        return self.assets[key] if key is not None else None


def validate_profile(doc) -> None:
    """Raise ValidationError describing the most relevant schema violation."""
    error = best_match(_VALIDATOR.iter_errors(doc))
    if error is None:
        return
    where = "/".join(str(p) for p in error.absolute_path) or "<root>"
    profile_id = doc.get("profileId") if isinstance(doc, dict) else None
    LOG.debug("profile %s failed validation at %s: %s", profile_id, where, error.message)
    raise ValidationError(f"invalid profile {profile_id!r} at {where}: {error.message}")
