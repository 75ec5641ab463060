"""Runtime configuration: touch thresholds, repository location, loop rate"""
import logging
from dataclasses import dataclass, fields, replace

import yaml

from core.errors import ValidationError

LOG = logging.getLogger("motionbridge.config")


@dataclass(frozen=True)
class MotionConfig:
    # A button whose analog value exceeds this counts as touched even if the
    # device does not report touch.
    button_touch_threshold: float = 0.05
    # An axis deflection beyond this (absolute) counts as touched.
    axis_touch_threshold: float = 0.1
    default_profile_id: str = "generic-trigger"
    profiles_base: str = "./profiles"
    hz: int = 60
    timeout: float = 10.0

    def __post_init__(self):
        for name in ("button_touch_threshold", "axis_touch_threshold"):
            val = getattr(self, name)
            if not isinstance(val, (int, float)) or not 0.0 <= val < 1.0:
                raise ValidationError(f"{name} must be a number in [0, 1), got {val!r}")
        if not isinstance(self.hz, int) or isinstance(self.hz, bool) or self.hz <= 0:
            raise ValidationError(f"hz must be a positive integer, got {self.hz!r}")
        if not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ValidationError(f"timeout must be a positive number, got {self.timeout!r}")

    def with_overrides(self, **overrides) -> "MotionConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


DEFAULT_CONFIG = MotionConfig()


def load_config(path: str) -> MotionConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"config file {path} must contain a mapping")
    known = {f.name for f in fields(MotionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValidationError(f"unknown config keys in {path}: {', '.join(unknown)}")
    cfg = MotionConfig(**data)
    LOG.debug("loaded config from %s -> %s", path, cfg)
    return cfg
