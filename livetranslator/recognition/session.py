"""A single continuous recognition session fed from the audio topic."""

import logging
import queue
import threading
from typing import Iterator, Optional

from pubsub import pub

from .base import AbstractRecognitionBackend
from .publisher import RecognitionPublisher
from ..errors import LiveTranslatorError
from ..models.events import AudioEvent

logger = logging.getLogger(__name__)


class RecognitionSession:
    """Pumps captured audio into a streaming backend on a worker thread.

    Results, errors and the end of the session are published through the
    given RecognitionPublisher. The end is always published exactly once.
    """

    def __init__(self,
                 backend: AbstractRecognitionBackend,
                 audio_topic: str,
                 publisher: RecognitionPublisher):
        self.backend = backend
        self.audio_topic = audio_topic
        self.publisher = publisher

        self.audio_queue: "queue.Queue[Optional[bytes]]" = queue.Queue()
        self.thread: Optional[threading.Thread] = None
        self.is_active = False

    def start(self) -> None:
        """Subscribe to captured audio and start the recognition thread."""
        if self.is_active:
            logger.warning("Recognition session already active")
            return

        pub.subscribe(self.on_audio_chunk, self.audio_topic)
        self.is_active = True
        self.thread = threading.Thread(target=self._run, daemon=True)
        self.thread.name = "RecognitionThread"
        self.thread.start()
        logger.info(f"Recognition session started on topic {self.audio_topic}")

    def on_audio_chunk(self, event: AudioEvent) -> None:
        """Queue audio for the backend; a final event closes the request stream."""
        if event.audio_data:
            self.audio_queue.put(event.audio_data)
        if event.final:
            self.audio_queue.put(None)

    def stop(self) -> None:
        """Close the request stream without waiting for a final audio event."""
        self.audio_queue.put(None)

    def join(self, timeout: float = 5.0) -> bool:
        """Wait for the recognition thread to finish."""
        if self.thread is None:
            return True
        self.thread.join(timeout)
        if self.thread.is_alive():
            logger.warning("Recognition thread did not terminate cleanly")
            return False
        return True

    def _audio_chunks(self) -> Iterator[bytes]:
        while True:
            chunk = self.audio_queue.get()
            if chunk is None:
                return
            yield chunk

    def _run(self) -> None:
        try:
            for event in self.backend.recognize(self._audio_chunks()):
                self.publisher.publish_result(event)
        except LiveTranslatorError as e:
            logger.error(f"Recognition failed: {e}")
            self.publisher.publish_error(str(e))
        except Exception as e:
            logger.error(f"Unexpected recognition failure: {e}", exc_info=True)
            self.publisher.publish_error(str(e))
        finally:
            try:
                pub.unsubscribe(self.on_audio_chunk, self.audio_topic)
            except Exception as e:
                logger.warning(f"Error during unsubscribe: {e}")
            self.is_active = False
            logger.info("Recognition session ended")
            self.publisher.publish_end()
