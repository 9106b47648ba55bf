"""Abstract base class for streaming recognition backends."""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from ..models.recognition import RecognitionEvent


class AbstractRecognitionBackend(ABC):
    """Abstract base class for streaming recognition backends."""

    def __init__(self, language: str = "en-US"):
        """Initialize backend with the fixed input locale."""
        self.language = language

    @abstractmethod
    def initialize(self) -> bool:
        """Initialize backend resources and verify configuration.

        Raises:
            RecognitionUnavailableError: If the backend cannot be used here
        """
        pass

    @abstractmethod
    def recognize(self, audio_chunks: Iterable[bytes]) -> Iterator[RecognitionEvent]:
        """Stream audio to the engine and yield recognition events.

        Blocks for the whole session. Ends when ``audio_chunks`` is exhausted
        and the engine has delivered its last result.

        Raises:
            RecognitionError: If the engine reports an error
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Clean up backend resources."""
        pass
