"""pyttsx3 speech synthesis backend."""

import logging
import threading
from typing import List, Optional

import pyttsx3

from .base import AbstractSynthesisBackend
from ..errors import SynthesisError
from ..models.voice import Voice

logger = logging.getLogger(__name__)


def _decode_language(language) -> str:
    # Some drivers report languages as bytes with a leading length byte
    if isinstance(language, bytes):
        return language.lstrip(b"\x05").decode("utf-8", errors="ignore")
    return str(language)


class Pyttsx3Backend(AbstractSynthesisBackend):
    """Offline text-to-speech through the platform engine wrapped by pyttsx3."""

    def __init__(self, rate: int = 170, volume: float = 1.0):
        self.rate = rate
        self.volume = volume
        self.engine = None
        self.default_voice_id: Optional[str] = None
        # pyttsx3 engines are not safe to drive from several threads at once
        self.lock = threading.Lock()

    def _get_engine(self):
        if self.engine is None:
            try:
                self.engine = pyttsx3.init()
            except Exception as e:
                raise SynthesisError(f"Speech synthesis not available: {e}") from e
            self.engine.setProperty('rate', self.rate)
            self.engine.setProperty('volume', self.volume)
            self.default_voice_id = self.engine.getProperty('voice')
            logger.info(f"pyttsx3 engine initialized (rate={self.rate}, volume={self.volume})")
        return self.engine

    def list_voices(self) -> List[Voice]:
        with self.lock:
            engine = self._get_engine()
            raw_voices = engine.getProperty('voices') or []

        voices = []
        for raw in raw_voices:
            languages = [_decode_language(lang) for lang in (getattr(raw, "languages", None) or [])]
            voices.append(Voice(
                voice_id=raw.id,
                name=raw.name or raw.id,
                languages=[lang for lang in languages if lang],
            ))
        logger.info(f"Found {len(voices)} synthesis voices")
        return voices

    def speak(self, text: str, voice_id: Optional[str] = None) -> None:
        with self.lock:
            engine = self._get_engine()
            try:
                # Engine keeps the last voice set, so fall back explicitly
                target_voice = voice_id or self.default_voice_id
                if target_voice:
                    engine.setProperty('voice', target_voice)
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                logger.error(f"Speech synthesis failed: {e}")
                raise SynthesisError(f"Speech synthesis failed: {e}") from e
        logger.debug(f"Spoke {len(text)} chars with voice {voice_id or 'default'}")
