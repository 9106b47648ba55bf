"""Abstract base class for speech synthesis backends."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.voice import Voice


class AbstractSynthesisBackend(ABC):
    """Abstract base class for speech synthesis backends."""

    @abstractmethod
    def list_voices(self) -> List[Voice]:
        """Return the voices the engine currently offers."""
        pass

    @abstractmethod
    def speak(self, text: str, voice_id: Optional[str] = None) -> None:
        """Speak text, blocking until done.

        Args:
            text: Text to speak
            voice_id: Voice to use, or None for the engine default

        Raises:
            SynthesisError: If the engine fails
        """
        pass
