"""Speech recognition for the Live Voice Translator."""

from .base import AbstractRecognitionBackend
from .google_backend import GoogleStreamingBackend
from .publisher import RecognitionPublisher
from .session import RecognitionSession

__all__ = [
    "AbstractRecognitionBackend",
    "GoogleStreamingBackend",
    "RecognitionPublisher",
    "RecognitionSession",
]
