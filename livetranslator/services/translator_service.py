"""Translator service: UI state plus the listen, translate and speak actions."""

import asyncio
import dataclasses
import logging
import threading
from typing import Optional

from pubsub import pub

from ..errors import LiveTranslatorError, RecognitionUnavailableError
from ..models.recognition import RecognitionEvent
from ..models.translation import SUPPORTED_LANGUAGES
from ..models.ui import TranslatorState
from ..models.voice import NO_VOICE
from ..recognition.base import AbstractRecognitionBackend
from ..recognition.publisher import RecognitionPublisher
from ..recognition.session import RecognitionSession
from ..synthesis.base import AbstractSynthesisBackend
from ..translation.client import LibreTranslateClient

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No text to translate yet."


class TranslatorService:
    """Owns the translator state and reacts to recognition callbacks.

    Every failure is caught here and stored verbatim in ``state.error``;
    nothing is retried.
    """

    def __init__(self,
                 backend: Optional[AbstractRecognitionBackend],
                 translator: LibreTranslateClient,
                 synthesizer: AbstractSynthesisBackend,
                 capture,
                 audio_topic: str = "audio.frame",
                 audio_error_topic: str = "audio.error",
                 publisher: Optional[RecognitionPublisher] = None,
                 target_language: str = "es"):
        """Initialize translator service.

        Args:
            backend: Streaming recognition backend, or None when recognition is unavailable
            translator: Translation endpoint client
            synthesizer: Speech synthesis backend
            capture: Microphone capture publishing to ``audio_topic``
            audio_topic: Pub/sub topic carrying captured audio
            audio_error_topic: Pub/sub topic carrying capture failures
            publisher: Recognition publisher; topics are subscribed from it
            target_language: Initial target language code
        """
        if target_language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported target language: {target_language}")

        self.backend = backend
        self.translator = translator
        self.synthesizer = synthesizer
        self.capture = capture
        self.audio_topic = audio_topic
        self.audio_error_topic = audio_error_topic
        self.publisher = publisher or RecognitionPublisher()

        self.state = TranslatorState(target_language=target_language)
        self.lock = threading.RLock()
        self.session: Optional[RecognitionSession] = None
        self.backend_ready = False

        pub.subscribe(self.on_recognition_event, self.publisher.result_topic)
        pub.subscribe(self.on_recognition_error, self.publisher.error_topic)
        pub.subscribe(self.on_recognition_end, self.publisher.end_topic)
        pub.subscribe(self.on_capture_error, self.audio_error_topic)

        logger.info(f"TranslatorService initialized (target={target_language})")

    # State access

    def get_state(self) -> TranslatorState:
        """Return a snapshot of the current state."""
        with self.lock:
            snapshot = dataclasses.replace(self.state, voices=list(self.state.voices))
        if snapshot.listening and self.capture is not None:
            snapshot.peak_level = self.capture.get_recording_stats().peak_level
        return snapshot

    def compose_recognized_text(self) -> str:
        with self.lock:
            return self.state.recognized_text()

    def _set_error(self, message: str) -> None:
        logger.error(f"Displayed error: {message}")
        with self.lock:
            self.state.error = message

    # Listening

    def _ensure_backend(self) -> AbstractRecognitionBackend:
        if self.backend is None:
            raise RecognitionUnavailableError("Speech recognition not supported: no recognition backend")
        if not self.backend_ready:
            self.backend.initialize()
            self.backend_ready = True
        return self.backend

    def start_listening(self) -> bool:
        """Start a continuous recognition session.

        Returns:
            True if a session was started
        """
        with self.lock:
            if self.state.listening:
                logger.warning("Already listening")
                return False
            self.state.listening = True

        try:
            backend = self._ensure_backend()
        except RecognitionUnavailableError as e:
            self._abort_listening(str(e))
            return False
        except Exception as e:
            logger.error(f"Recognition backend failed to initialize: {e}", exc_info=True)
            self._abort_listening(f"Speech recognition not supported: {e}")
            return False

        self.session = RecognitionSession(backend, self.audio_topic, self.publisher)
        self.session.start()
        self.capture.start_recording()
        logger.info("Listening started")
        return True

    def _abort_listening(self, message: str) -> None:
        with self.lock:
            self.state.listening = False
        self._set_error(message)

    def stop_listening(self) -> None:
        """Stop capturing; the session ends once the recognizer drains."""
        with self.lock:
            listening = self.state.listening
        if not listening:
            logger.warning("Not listening")
            return

        if self.capture.is_recording:
            self.capture.stop_recording()
        if self.session is not None:
            self.session.stop()
        logger.info("Listening stop requested")

    def on_recognition_event(self, event: RecognitionEvent) -> None:
        """Append finalized segments and replace the interim segment."""
        final_transcript = ""
        interim_transcript = ""
        for result in event.changed_results():
            if result.is_final:
                final_transcript += result.transcript
            else:
                interim_transcript += result.transcript

        with self.lock:
            self.state.final_text += final_transcript
            self.state.interim_text = interim_transcript

    def on_recognition_error(self, message: str) -> None:
        self._set_error(message)

    def on_capture_error(self, message: str) -> None:
        self._set_error(f"Audio capture failed: {message}")

    def on_recognition_end(self) -> None:
        with self.lock:
            self.state.listening = False
        # Recognizer may end on its own while the microphone is still open
        if self.capture is not None and self.capture.is_recording:
            self.capture.stop_recording()
        logger.info("Listening ended")

    # Translation and speech

    async def translate_and_speak(self) -> None:
        """Translate the recognized text and speak it with the selected voice."""
        text = self.compose_recognized_text()
        if not text:
            self._set_error(NO_TEXT_MESSAGE)
            return

        with self.lock:
            if self.state.translating:
                logger.warning("Translation already in progress")
                return
            self.state.translating = True
            target_language = self.state.target_language
            selected_voice_id = self.state.selected_voice_id
            voices = list(self.state.voices)

        try:
            result = await self.translator.translate(text, target_language)
            with self.lock:
                self.state.translation = result.translated_text

            if selected_voice_id != NO_VOICE:
                voice = next((v for v in voices if v.voice_id == selected_voice_id), None)
                voice_id = voice.voice_id if voice else None
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(
                    None, self.synthesizer.speak, result.translated_text, voice_id)
        except LiveTranslatorError as e:
            self._set_error(str(e))
        except Exception as e:
            logger.error(f"Unexpected translate-and-speak failure: {e}", exc_info=True)
            self._set_error(str(e))
        finally:
            with self.lock:
                self.state.translating = False

    def start_translate_and_speak(self) -> threading.Thread:
        """Run translate_and_speak on a worker thread with its own event loop."""
        thread = threading.Thread(target=asyncio.run,
                                  args=(self.translate_and_speak(),),
                                  daemon=True)
        thread.name = "TranslateThread"
        thread.start()
        return thread

    # Voices and languages

    def load_voices(self) -> None:
        """Refresh voices from the synthesizer, selecting the first if none is."""
        try:
            voices = self.synthesizer.list_voices()
        except LiveTranslatorError as e:
            self._set_error(str(e))
            voices = []

        with self.lock:
            self.state.voices = voices
            if voices and self.state.selected_voice_id == NO_VOICE:
                self.state.selected_voice_id = voices[0].voice_id

    def set_voice(self, voice_id: str) -> bool:
        with self.lock:
            known = voice_id == NO_VOICE or any(v.voice_id == voice_id for v in self.state.voices)
            if known:
                self.state.selected_voice_id = voice_id
        if not known:
            self._set_error(f"Unknown voice: {voice_id}")
        return known

    def cycle_voice(self) -> None:
        with self.lock:
            voices = self.state.voices
            if not voices:
                return
            ids = [v.voice_id for v in voices]
            current = self.state.selected_voice_id
            index = ids.index(current) + 1 if current in ids else 0
            self.state.selected_voice_id = ids[index % len(ids)]

    def set_target_language(self, code: str) -> bool:
        if code not in SUPPORTED_LANGUAGES:
            self._set_error(f"Unsupported target language: {code}")
            return False
        with self.lock:
            self.state.target_language = code
        return True

    def cycle_target_language(self) -> None:
        codes = list(SUPPORTED_LANGUAGES)
        with self.lock:
            index = codes.index(self.state.target_language) + 1
            self.state.target_language = codes[index % len(codes)]

    # Lifecycle

    def reset(self) -> None:
        """Clear transcript, translation and error."""
        with self.lock:
            self.state.final_text = ""
            self.state.interim_text = ""
            self.state.translation = ""
            self.state.error = None

    def shutdown(self) -> None:
        if self.capture is not None and self.capture.is_recording:
            self.capture.stop_recording()
        if self.session is not None:
            self.session.stop()
            self.session.join()

        try:
            pub.unsubscribe(self.on_recognition_event, self.publisher.result_topic)
            pub.unsubscribe(self.on_recognition_error, self.publisher.error_topic)
            pub.unsubscribe(self.on_recognition_end, self.publisher.end_topic)
            pub.unsubscribe(self.on_capture_error, self.audio_error_topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")

        if self.backend is not None:
            self.backend.cleanup()
        logger.info("TranslatorService shutdown complete")
