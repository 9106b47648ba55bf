"""Google Speech-to-Text streaming recognition backend."""

import logging
from typing import Iterable, Iterator, Optional

import google.auth
from google.auth import exceptions as auth_exceptions
from google.api_core import exceptions as gax_exceptions
from google.cloud import speech
from google.oauth2 import service_account

from .base import AbstractRecognitionBackend
from ..errors import RecognitionError, RecognitionUnavailableError
from ..models.recognition import RecognitionEvent, RecognitionResult

logger = logging.getLogger(__name__)


class GoogleStreamingBackend(AbstractRecognitionBackend):
    """Continuous recognition with interim results over Google streaming STT."""

    def __init__(self,
                 credentials_path: Optional[str] = None,
                 sample_rate: int = 16000,
                 language: str = "en-US",
                 use_enhanced: bool = True,
                 enable_automatic_punctuation: bool = True):
        """Initialize Google streaming backend.

        Args:
            credentials_path: Service account JSON file. When None, application
                default credentials are used.
            sample_rate: Sample rate of the LINEAR16 audio in Hz
            language: Input locale (e.g. 'en-US')
            use_enhanced: Whether to use the enhanced model
            enable_automatic_punctuation: Enable automatic punctuation
        """
        super().__init__(language)
        self.credentials_path = credentials_path
        self.use_enhanced = use_enhanced
        self.enable_automatic_punctuation = enable_automatic_punctuation
        self.client = None
        self.project_id = None
        self.service_name = "Google Speech-to-Text"
        self.streaming_config = speech.StreamingRecognitionConfig(
            config=speech.RecognitionConfig(
                encoding=speech.RecognitionConfig.AudioEncoding.LINEAR16,
                sample_rate_hertz=sample_rate,
                language_code=self.language,
                use_enhanced=self.use_enhanced,
                enable_automatic_punctuation=self.enable_automatic_punctuation,
            ),
            interim_results=True,
            single_utterance=False,
        )

    def initialize(self) -> bool:
        """Create the Speech client, failing if no credentials can be found."""
        try:
            if self.credentials_path:
                logger.info(f"Loading Google credentials from: {self.credentials_path}")
                credentials = service_account.Credentials.from_service_account_file(
                    self.credentials_path)
                self.project_id = credentials.project_id
            else:
                logger.info("Using Google application default credentials")
                credentials, self.project_id = google.auth.default()
        except (auth_exceptions.DefaultCredentialsError, FileNotFoundError, ValueError) as e:
            raise RecognitionUnavailableError(
                f"Speech recognition not supported: no usable Google credentials ({e})") from e

        self.client = speech.SpeechClient(credentials=credentials)
        logger.info(f"Google streaming backend initialized (project: {self.project_id})")
        return True

    def recognize(self, audio_chunks: Iterable[bytes]) -> Iterator[RecognitionEvent]:
        """Stream audio chunks and yield one event per non-empty response."""
        if self.client is None:
            raise RecognitionUnavailableError("Speech recognition not supported: backend not initialized")

        requests = (speech.StreamingRecognizeRequest(audio_content=chunk)
                    for chunk in audio_chunks)
        try:
            responses = self.client.streaming_recognize(
                config=self.streaming_config, requests=requests)
            for response in responses:
                if response.error.code:
                    raise RecognitionError(response.error.message or
                                           f"recognition error code {response.error.code}")
                if not response.results:
                    continue
                yield self._to_event(response)
        except gax_exceptions.OutOfRange as e:
            # Stream duration limit reached; the session simply ends
            logger.info(f"Google streaming session ended by server: {e}")
        except gax_exceptions.GoogleAPICallError as e:
            logger.error(f"Google STT streaming error: {e}")
            raise RecognitionError(str(e)) from e

    def _to_event(self, response) -> RecognitionEvent:
        results = []
        for result in response.results:
            if not result.alternatives:
                continue
            alternative = result.alternatives[0]
            results.append(RecognitionResult(
                transcript=alternative.transcript,
                is_final=result.is_final,
                confidence=alternative.confidence,
                stability=result.stability,
            ))
        logger.debug(f"Recognition response: {[(r.transcript, r.is_final) for r in results]}")
        return RecognitionEvent(results=results, result_index=0)

    def cleanup(self) -> None:
        """Release the Speech client."""
        self.client = None
