"""Speech synthesis for the Live Voice Translator."""

from .base import AbstractSynthesisBackend
from .pyttsx3_backend import Pyttsx3Backend

__all__ = [
    "AbstractSynthesisBackend",
    "Pyttsx3Backend",
]
