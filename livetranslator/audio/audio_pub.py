"""Audio publisher module for pub/sub event publishing."""

import logging
from pubsub import pub
from ..models.events import AudioEvent

logger = logging.getLogger(__name__)


class AudioPublisher:
    """Publishes audio events and capture failures using pubsub.pub."""

    def __init__(self, topic: str = "audio.frame", error_topic: str = "audio.error"):
        self.topic = topic
        self.error_topic = error_topic
        logger.info(f"AudioPublisher initialized with topic: {topic}")

    def publish_audio_event(self, audio_event: AudioEvent) -> None:
        """Publish an audio event to the pub/sub topic."""
        pub.sendMessage(self.topic, event=audio_event)

    def publish_audio_error(self, message: str) -> None:
        """Publish a capture failure message to the error topic."""
        pub.sendMessage(self.error_topic, message=message)
