"""Translation client for the Live Voice Translator."""

from .client import LibreTranslateClient

__all__ = [
    "LibreTranslateClient",
]
