"""Live Voice Translator: speech in, translated speech out."""

__version__ = "0.1.0"
