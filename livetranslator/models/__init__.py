"""Data models for the Live Voice Translator."""

from .audio import AudioStats
from .events import AudioEvent
from .recognition import RecognitionResult, RecognitionEvent
from .translation import TranslationResult, SUPPORTED_LANGUAGES
from .voice import Voice, NO_VOICE
from .ui import TranslatorState

__all__ = [
    "AudioStats",
    "AudioEvent",
    "RecognitionResult",
    "RecognitionEvent",
    "TranslationResult",
    "SUPPORTED_LANGUAGES",
    "Voice",
    "NO_VOICE",
    "TranslatorState",
]
