"""Base input source abstraction"""
import abc
from typing import List, Optional

from core.state import GamepadSnapshot, Handedness


class InputSource(abc.ABC):
    """A tracked controller: candidate profile ids, handedness and live gamepad data."""

    @property
    @abc.abstractmethod
    def profiles(self) -> List[str]:
        """Candidate profile ids, most specific first."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def handedness(self) -> Handedness:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def gamepad(self) -> Optional[GamepadSnapshot]:
        """Current device snapshot, or None when the device is gone."""
        raise NotImplementedError
