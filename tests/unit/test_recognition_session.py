"""Unit tests for RecognitionSession and RecognitionPublisher."""

import pytest
from pubsub import pub

from livetranslator.models.recognition import RecognitionEvent
from livetranslator.recognition.publisher import RecognitionPublisher
from livetranslator.recognition.session import RecognitionSession

from conftest import AUDIO_TOPIC, FakeCapture, FakeRecognitionBackend, final, interim


class Collector:
    """Subscribes to the session topics and records what arrives."""

    def __init__(self, publisher: RecognitionPublisher):
        self.events = []
        self.errors = []
        self.ended = 0
        pub.subscribe(self.on_result, publisher.result_topic)
        pub.subscribe(self.on_error, publisher.error_topic)
        pub.subscribe(self.on_end, publisher.end_topic)

    def on_result(self, event):
        self.events.append(event)

    def on_error(self, message):
        self.errors.append(message)

    def on_end(self):
        self.ended += 1


@pytest.fixture
def publisher():
    return RecognitionPublisher("session_result", "session_error", "session_end")


@pytest.mark.unit
class TestRecognitionSession:

    def test_events_published_in_order_then_end(self, publisher):
        scripted = [
            RecognitionEvent(results=[interim("a")]),
            RecognitionEvent(results=[final("ab")]),
        ]
        backend = FakeRecognitionBackend(events=scripted)
        collector = Collector(publisher)
        capture = FakeCapture()
        session = RecognitionSession(backend, AUDIO_TOPIC, publisher)

        session.start()
        capture.push(b"\x00\x01")
        capture.push(b"\x00\x02", is_final=True)
        assert session.join(timeout=5.0)

        assert backend.received == [b"\x00\x01", b"\x00\x02"]
        assert collector.events == scripted
        assert collector.errors == []
        assert collector.ended == 1
        assert session.is_active is False

    def test_empty_audio_is_not_forwarded(self, publisher):
        backend = FakeRecognitionBackend()
        Collector(publisher)
        capture = FakeCapture()
        session = RecognitionSession(backend, AUDIO_TOPIC, publisher)

        session.start()
        capture.push(b"", is_final=True)
        assert session.join(timeout=5.0)

        assert backend.received == []

    def test_backend_error_published_before_end(self, publisher):
        backend = FakeRecognitionBackend(error="audio-capture")
        collector = Collector(publisher)
        session = RecognitionSession(backend, AUDIO_TOPIC, publisher)

        session.start()
        session.stop()
        assert session.join(timeout=5.0)

        assert collector.errors == ["audio-capture"]
        assert collector.ended == 1

    def test_unexpected_exception_published_as_error(self, publisher):
        class ExplodingBackend(FakeRecognitionBackend):
            def recognize(self, audio_chunks):
                raise OSError("device unplugged")

        collector = Collector(publisher)
        session = RecognitionSession(ExplodingBackend(), AUDIO_TOPIC, publisher)

        session.start()
        assert session.join(timeout=5.0)

        assert collector.errors == ["device unplugged"]
        assert collector.ended == 1

    def test_audio_after_end_is_not_consumed(self, publisher):
        backend = FakeRecognitionBackend()
        Collector(publisher)
        capture = FakeCapture()
        session = RecognitionSession(backend, AUDIO_TOPIC, publisher)

        session.start()
        session.stop()
        assert session.join(timeout=5.0)
        capture.push(b"\x05\x06")

        assert backend.received == []
        assert session.audio_queue.empty()
