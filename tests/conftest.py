"""Pytest configuration and fixtures for Live Voice Translator tests."""

import time
import logging
from typing import Iterable, Iterator, List, Optional
from unittest.mock import Mock, patch

import numpy as np
import pytest
from pubsub import pub

from livetranslator.errors import RecognitionError, RecognitionUnavailableError, TranslationError
from livetranslator.models.audio import AudioStats
from livetranslator.models.events import AudioEvent
from livetranslator.models.recognition import RecognitionEvent, RecognitionResult
from livetranslator.models.translation import TranslationResult
from livetranslator.models.voice import Voice
from livetranslator.recognition.base import AbstractRecognitionBackend
from livetranslator.synthesis.base import AbstractSynthesisBackend


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

AUDIO_TOPIC = "audio.frame"


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop every pub/sub subscription made during a test."""
    yield
    pub.unsubAll()


@pytest.fixture
def sample_audio_chunk():
    """Generate a 1024-sample 16-bit sine chunk."""
    sample_rate = 16000
    duration = 1024 / sample_rate
    t = np.linspace(0, duration, 1024, False)
    wave_data = np.sin(2 * np.pi * 440 * t)
    return (wave_data * 32767).astype(np.int16).tobytes()


@pytest.fixture
def mock_pyaudio():
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()

        mock_stream.read.return_value = b'\x00' * 2048  # Silent audio

        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_class.return_value = mock_pyaudio_instance

        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


def interim(text: str) -> RecognitionResult:
    return RecognitionResult(transcript=text, is_final=False)


def final(text: str) -> RecognitionResult:
    return RecognitionResult(transcript=text, is_final=True, confidence=0.9)


class FakeRecognitionBackend(AbstractRecognitionBackend):
    """Consumes every audio chunk, then replays scripted events."""

    def __init__(self, events: Optional[List[RecognitionEvent]] = None,
                 error: Optional[str] = None, available: bool = True):
        super().__init__("en-US")
        self.events = events or []
        self.error = error
        self.available = available
        self.received: List[bytes] = []
        self.initialized = 0
        self.cleaned_up = False

    def initialize(self) -> bool:
        if not self.available:
            raise RecognitionUnavailableError("Speech recognition not supported: test backend")
        self.initialized += 1
        return True

    def recognize(self, audio_chunks: Iterable[bytes]) -> Iterator[RecognitionEvent]:
        for chunk in audio_chunks:
            self.received.append(chunk)
        yield from self.events
        if self.error:
            raise RecognitionError(self.error)

    def cleanup(self) -> None:
        self.cleaned_up = True


class FakeSynthesizer(AbstractSynthesisBackend):
    def __init__(self, voices: Optional[List[Voice]] = None):
        self.voices = voices or []
        self.spoken = []

    def list_voices(self) -> List[Voice]:
        return list(self.voices)

    def speak(self, text: str, voice_id: Optional[str] = None) -> None:
        self.spoken.append((text, voice_id))


class FakeTranslator:
    """Stands in for LibreTranslateClient."""

    def __init__(self, translated: str = "hola mundo", error: Optional[str] = None):
        self.translated = translated
        self.error = error
        self.calls = []

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        self.calls.append((text, target_language))
        if self.error:
            raise TranslationError(self.error)
        return TranslationResult(
            source_text=text,
            translated_text=self.translated,
            source_language="en",
            target_language=target_language,
            processing_time=0.01,
        )


class FakeCapture:
    """Microphone stand-in that publishes a final event when stopped."""

    def __init__(self, topic: str = AUDIO_TOPIC):
        self.topic = topic
        self.is_recording = False
        self.started = 0

    def start_recording(self) -> None:
        self.is_recording = True
        self.started += 1

    def push(self, data: bytes, is_final: bool = False) -> None:
        pub.sendMessage(self.topic, event=AudioEvent(
            chunk_id="chunk_test",
            audio_data=data,
            timestamp=time.time(),
            sequence_number=0,
            final=is_final,
        ))

    def stop_recording(self) -> None:
        if not self.is_recording:
            return
        self.is_recording = False
        self.push(b"", is_final=True)

    def get_recording_stats(self) -> AudioStats:
        return AudioStats(
            is_recording=self.is_recording,
            duration_seconds=0.0,
            sample_rate=16000,
            chunk_size=1024,
            total_chunks=0,
            peak_level=0.25,
        )


@pytest.fixture
def voices():
    return [
        Voice(voice_id="voice.es", name="Monica", languages=["es-ES"]),
        Voice(voice_id="voice.fr", name="Amelie", languages=["fr-CA"]),
    ]


@pytest.fixture
def fake_capture():
    return FakeCapture()


@pytest.fixture
def fake_synthesizer(voices):
    return FakeSynthesizer(voices)


@pytest.fixture
def fake_translator():
    return FakeTranslator()
