"""Recognition publisher module for pub/sub event publishing."""

import logging
from pubsub import pub
from ..models.recognition import RecognitionEvent

logger = logging.getLogger(__name__)

RESULT_TOPIC = "recognition_result"
ERROR_TOPIC = "recognition_error"
END_TOPIC = "recognition_end"


class RecognitionPublisher:
    """Publishes recognition results, errors and session end using pubsub.pub."""

    def __init__(self,
                 result_topic: str = RESULT_TOPIC,
                 error_topic: str = ERROR_TOPIC,
                 end_topic: str = END_TOPIC):
        self.result_topic = result_topic
        self.error_topic = error_topic
        self.end_topic = end_topic
        logger.info(f"RecognitionPublisher initialized with topics: "
                    f"{result_topic}, {error_topic}, {end_topic}")

    def publish_result(self, event: RecognitionEvent) -> None:
        pub.sendMessage(self.result_topic, event=event)
        logger.debug(f"Published recognition event with {len(event.results)} results "
                     f"(result_index={event.result_index})")

    def publish_error(self, message: str) -> None:
        pub.sendMessage(self.error_topic, message=message)
        logger.debug(f"Published recognition error: {message}")

    def publish_end(self) -> None:
        pub.sendMessage(self.end_topic)
        logger.debug("Published recognition end")
