"""Services layer for the Live Voice Translator."""

from .translator_service import TranslatorService

__all__ = [
    "TranslatorService",
]
