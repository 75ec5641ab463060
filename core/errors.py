"""Error taxonomy shared by the mapping engine and the profile resolver"""


class MotionBridgeError(Exception):
    """Base class for every error raised by motionbridge."""


class ValidationError(MotionBridgeError):
    """A description is malformed (missing fields, empty collections, bad enums)."""


class ConfigurationError(MotionBridgeError):
    """The input source's handedness has no matching layout in the profile."""


class NotFoundError(MotionBridgeError):
    """A profile id, a layout or a named scene node could not be located."""


class NetworkError(MotionBridgeError):
    """Transport failure while fetching the profiles list or a profile."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
