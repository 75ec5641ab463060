"""Motion controller: a resolved profile bound to a live input source

Owns every Component of the selected layout and drives them once per frame.
"""
import logging
from typing import Dict, Optional

from components import Component
from core.config import DEFAULT_CONFIG, MotionConfig
from core.errors import ConfigurationError
from core.profile import GamepadMapping, Profile
from core.reader import InputSource
from core.state import GamepadIndices

LOG = logging.getLogger("motionbridge.controller")


def invert_gamepad_mapping(mapping: GamepadMapping) -> Dict[str, GamepadIndices]:
    """Turn the positional buttons/axes arrays into per-component indices."""
    indices: Dict[str, GamepadIndices] = {}
    for button_index, component_id in enumerate(mapping.buttons):
        if component_id is None:
            continue
        indices.setdefault(component_id, GamepadIndices()).button = button_index
    for axis_index, axis in enumerate(mapping.axes):
        if axis is None:
            continue
        entry = indices.setdefault(axis.component_id, GamepadIndices())
        if axis.axis == "xAxis":
            entry.x_axis = axis_index
        else:
            entry.y_axis = axis_index
    return indices


class MotionController:
    def __init__(self, input_source: InputSource, profile: Profile, asset_url: Optional[str],
                 config: MotionConfig = DEFAULT_CONFIG):
        self.input_source = input_source
        self.profile = profile
        self.asset_url = asset_url
        self.handedness = input_source.handedness

        try:
            self.layout = profile.layout_for(self.handedness)
        except ValueError:
            raise ConfigurationError(f"unknown handedness {self.handedness!r}") from None
        if self.layout is None:
            raise ConfigurationError(
                f"no layout for handedness {self.handedness!r} in profile {profile.profile_id}"
            )

        gamepad_indices = invert_gamepad_mapping(self.layout.gamepad_mapping)
        for orphan in sorted(set(gamepad_indices) - set(self.layout.components)):
            LOG.warning("gamepad mapping of %s names unknown component %s", profile.profile_id, orphan)

        # built in full before being exposed; any failure aborts the controller
        components = {}
        for component_id, description in self.layout.components.items():
            indices = gamepad_indices.get(component_id, GamepadIndices())
            components[component_id] = Component(
                component_id, {**description, "gamepadIndices": indices.as_dict()}, config=config
            )
        self.components: Dict[str, Component] = components
        LOG.info("motion controller %s/%s ready with %d components",
                 profile.profile_id, getattr(self.handedness, "value", self.handedness), len(components))

    @property
    def profile_id(self) -> str:
        return self.profile.profile_id

    @property
    def data(self) -> dict:
        """JSON-serializable per-component snapshot for debugging/telemetry."""
        return {cid: component.values.as_dict() for cid, component in self.components.items()}

    def update_from_gamepad(self):
        gamepad = self.input_source.gamepad
        if gamepad is None:
            LOG.debug("no gamepad attached to %s; skipping update", self.profile_id)
            return
        for component in self.components.values():
            try:
                component.update_from_gamepad(gamepad)
            except (IndexError, AttributeError, TypeError) as e:
                LOG.warning("component %s skipped this frame: %s", component.id, e)

    def __repr__(self):
        return f"MotionController({self.profile_id!r}, asset_url={self.asset_url!r})"


class ControllerSelection:
    """Owns the active MotionController and discards stale resolutions.

    Each call to `select` takes a new generation number. A resolution that
    completes after a newer `select` (or `clear`) is dropped rather than
    replacing the newer controller.
    """

    def __init__(self, resolver, config: MotionConfig = DEFAULT_CONFIG):
        self.resolver = resolver
        self.config = config
        self.generation = 0
        self.controller: Optional[MotionController] = None

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def clear(self):
        self.generation += 1
        self.controller = None

    async def select(self, input_source: InputSource) -> Optional[MotionController]:
        self.generation += 1
        generation = self.generation
        # the previous controller belongs to a superseded input source
        self.controller = None
        try:
            resolved = await self.resolver.resolve(input_source.profiles, input_source.handedness)
        except Exception:
            if not self.is_current(generation):
                LOG.info("selection %d superseded; dropping its failure", generation)
                return None
            raise
        if not self.is_current(generation):
            LOG.info("selection %d superseded by %d; discarding %s",
                     generation, self.generation, resolved.profile.profile_id)
            return None
        self.controller = MotionController(input_source, resolved.profile, resolved.asset_path, config=self.config)
        return self.controller
