"""Microphone capture running in a background thread."""

import time
import logging
from datetime import datetime
from threading import Thread, Event
from typing import Optional, Callable

import numpy as np
import pyaudio

from ..models.audio import AudioStats
from ..models.events import AudioEvent

logger = logging.getLogger(__name__)


class AudioCapture:
    """Continuous audio capture that hands every chunk to a callback."""

    def __init__(
        self,
        callback: Callable[[AudioEvent], None],
        error_callback: Optional[Callable[[str], None]] = None,
        sample_rate: int = 16000,
        chunk_size: int = 1024,
        channels: int = 1,
        format: int = pyaudio.paInt16,
    ):
        """Initialize audio capture with specified parameters.

        Args:
            callback: Receives one AudioEvent per captured chunk
            error_callback: Receives the message of a capture failure
            sample_rate: Audio sample rate (16kHz for speech recognition)
            chunk_size: Size of each audio chunk in samples
            channels: Number of audio channels (1 for mono)
            format: Audio format (16-bit signed int)
        """
        self.audio_event_callback = callback
        self.error_callback = error_callback
        self.sample_rate = sample_rate
        self.chunk_size = chunk_size
        self.channels = channels
        self.format = format

        self.recording_thread: Optional[Thread] = None
        self.stop_event = Event()
        self.is_recording = False

        self.start_time: Optional[datetime] = None
        self.total_chunks = 0
        self.peak_level = 0.0

        self.pyaudio_instance: Optional[pyaudio.PyAudio] = None

    def start_recording(self) -> None:
        """Start continuous recording in background thread."""
        if self.is_recording:
            logger.warning("Recording already in progress")
            return

        logger.info("Starting audio recording")
        self.stop_event.clear()
        self.start_time = datetime.now()
        self.total_chunks = 0
        self.peak_level = 0.0

        self.is_recording = True
        self.recording_thread = Thread(target=self._record_continuously, daemon=True)
        self.recording_thread.name = "AudioCaptureThread"
        self.recording_thread.start()

    def stop_recording(self) -> None:
        """Stop recording and clean up resources."""
        if not self.is_recording:
            logger.warning("No recording in progress")
            return

        logger.info("Stopping audio recording")
        self.stop_event.set()

        if self.recording_thread and self.recording_thread.is_alive():
            self.recording_thread.join(timeout=2.0)
            if self.recording_thread.is_alive():
                logger.warning("Recording thread did not stop cleanly")

        self.is_recording = False
        logger.info(f"Recording stopped. Total chunks: {self.total_chunks}")

    def _open_audio_stream(self):
        self.pyaudio_instance = pyaudio.PyAudio()
        stream = self.pyaudio_instance.open(
            format=self.format,
            channels=self.channels,
            rate=self.sample_rate,
            input=True,
            frames_per_buffer=self.chunk_size,
        )
        logger.info(f"Audio stream opened: {self.sample_rate}Hz, "
                    f"{self.chunk_size} samples/chunk")
        return stream

    def _read_audio_chunk(self, stream) -> bytes:
        audio_chunk = stream.read(self.chunk_size, exception_on_overflow=False)
        self.total_chunks += 1
        self.peak_level = self._measure_peak(audio_chunk)
        return audio_chunk

    @staticmethod
    def _measure_peak(audio_chunk: bytes) -> float:
        """Peak amplitude of a 16-bit chunk, normalized to 0.0-1.0."""
        samples = np.frombuffer(audio_chunk, dtype=np.int16)
        if samples.size == 0:
            return 0.0
        return float(np.abs(samples.astype(np.int32)).max()) / 32768.0

    def _publish_audio_event(self, audio_chunk: bytes, final: bool = False) -> None:
        audio_event = AudioEvent(
            chunk_id=f"chunk_{self.total_chunks}",
            audio_data=audio_chunk,
            timestamp=time.time(),
            sequence_number=self.total_chunks,
            sample_rate=self.sample_rate,
            channels=self.channels,
            final=final
        )
        self.audio_event_callback(audio_event)

    def _record_continuously(self) -> None:
        """Continuous recording loop in background thread."""
        stream = None
        final_sent = False
        try:
            stream = self._open_audio_stream()
            while not self.stop_event.is_set():
                audio_chunk = self._read_audio_chunk(stream)
                self._publish_audio_event(audio_chunk)
            # Final event tells consumers the capture is over
            audio_chunk = self._read_audio_chunk(stream)
            self._publish_audio_event(audio_chunk, final=True)
            final_sent = True
        except Exception as e:
            logger.error(f"Audio capture failed: {e}", exc_info=True)
            if self.error_callback:
                self.error_callback(str(e) or type(e).__name__)
        finally:
            if not final_sent:
                # Consumers still need to see the end of the capture
                self.stop_event.set()
                self.is_recording = False
                self._publish_audio_event(b"", final=True)
            if stream:
                stream.stop_stream()
                stream.close()
            if self.pyaudio_instance:
                self.pyaudio_instance.terminate()
                self.pyaudio_instance = None

    def get_recording_stats(self) -> AudioStats:
        """Get current recording statistics."""
        duration = 0.0
        if self.start_time:
            duration = (datetime.now() - self.start_time).total_seconds()

        return AudioStats(
            is_recording=self.is_recording,
            duration_seconds=duration,
            sample_rate=self.sample_rate,
            chunk_size=self.chunk_size,
            total_chunks=self.total_chunks,
            peak_level=self.peak_level,
        )
