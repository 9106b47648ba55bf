"""Terminal user interface."""

from .translator_screen import TranslatorScreen

__all__ = [
    "TranslatorScreen",
]
