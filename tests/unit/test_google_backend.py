"""Unit tests for GoogleStreamingBackend with a mocked Speech client."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from google.api_core import exceptions as gax_exceptions
from google.auth import exceptions as auth_exceptions

from livetranslator.errors import RecognitionError, RecognitionUnavailableError
from livetranslator.recognition.google_backend import GoogleStreamingBackend


def response(*results, code=0, message=""):
    return SimpleNamespace(error=SimpleNamespace(code=code, message=message), results=list(results))


def result(transcript, is_final, confidence=0.0, stability=0.0):
    return SimpleNamespace(
        alternatives=[SimpleNamespace(transcript=transcript, confidence=confidence)],
        is_final=is_final,
        stability=stability,
    )


@pytest.fixture
def backend():
    backend = GoogleStreamingBackend(language="en-US")
    backend.client = Mock()
    return backend


@pytest.mark.unit
class TestGoogleStreamingBackend:

    def test_streaming_config_is_continuous_with_interim_results(self):
        backend = GoogleStreamingBackend(language="en-US", sample_rate=16000)

        assert backend.streaming_config.interim_results is True
        assert backend.streaming_config.single_utterance is False
        assert backend.streaming_config.config.language_code == "en-US"
        assert backend.streaming_config.config.sample_rate_hertz == 16000

    def test_responses_become_events(self, backend):
        backend.client.streaming_recognize.return_value = iter([
            response(result("hel", False, stability=0.2)),
            response(),
            response(result("hello", True, confidence=0.93)),
        ])

        events = list(backend.recognize([b"\x00\x00"]))

        assert len(events) == 2
        assert events[0].results[0].transcript == "hel"
        assert events[0].results[0].is_final is False
        assert events[0].results[0].stability == 0.2
        assert events[1].results[0].transcript == "hello"
        assert events[1].results[0].is_final is True
        assert events[1].result_index == 0

    def test_results_without_alternatives_skipped(self, backend):
        empty = SimpleNamespace(alternatives=[], is_final=False, stability=0.0)
        backend.client.streaming_recognize.return_value = iter([
            response(empty, result("ok", False)),
        ])

        events = list(backend.recognize([]))

        assert [r.transcript for r in events[0].results] == ["ok"]

    def test_response_error_raises(self, backend):
        backend.client.streaming_recognize.return_value = iter([
            response(code=3, message="bad audio"),
        ])

        with pytest.raises(RecognitionError, match="bad audio"):
            list(backend.recognize([]))

    def test_stream_duration_limit_ends_quietly(self, backend):
        backend.client.streaming_recognize.side_effect = gax_exceptions.OutOfRange("limit")

        assert list(backend.recognize([])) == []

    def test_api_errors_wrapped(self, backend):
        backend.client.streaming_recognize.side_effect = gax_exceptions.ServiceUnavailable("down")

        with pytest.raises(RecognitionError):
            list(backend.recognize([]))

    def test_recognize_before_initialize_is_unavailable(self):
        backend = GoogleStreamingBackend()

        with pytest.raises(RecognitionUnavailableError):
            list(backend.recognize([]))

    def test_initialize_without_credentials_is_unavailable(self):
        backend = GoogleStreamingBackend()

        with patch("google.auth.default",
                   side_effect=auth_exceptions.DefaultCredentialsError("none")):
            with pytest.raises(RecognitionUnavailableError, match="Speech recognition not supported"):
                backend.initialize()

    def test_initialize_with_application_default_credentials(self):
        backend = GoogleStreamingBackend()
        credentials = Mock()

        with patch("google.auth.default", return_value=(credentials, "demo-project")), \
                patch("livetranslator.recognition.google_backend.speech.SpeechClient") as client_class:
            assert backend.initialize() is True

        client_class.assert_called_once_with(credentials=credentials)
        assert backend.project_id == "demo-project"

    def test_cleanup_drops_client(self, backend):
        backend.cleanup()

        assert backend.client is None
