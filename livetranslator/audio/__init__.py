"""Microphone capture and audio event publishing."""

from .capture import AudioCapture
from .audio_pub import AudioPublisher

__all__ = [
    'AudioCapture',
    'AudioPublisher',
]
