"""Client for a LibreTranslate-compatible translation endpoint."""

import time
import asyncio
import logging
from typing import Optional

import aiohttp

from ..errors import TranslationError
from ..models.translation import TranslationResult

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://libretranslate.com/translate"


class LibreTranslateClient:
    """Sends one text per POST and returns the translated text."""

    def __init__(self,
                 endpoint: str = DEFAULT_ENDPOINT,
                 source_language: str = "en",
                 timeout_seconds: float = 15.0,
                 api_key: Optional[str] = None):
        """Initialize translation client.

        Args:
            endpoint: Full URL of the translate endpoint
            source_language: Language of the recognized speech
            timeout_seconds: Total timeout for one request
            api_key: Optional key, sent only when set
        """
        self.endpoint = endpoint
        self.source_language = source_language
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.api_key = api_key

        logger.info(f"LibreTranslateClient initialized with endpoint: {endpoint}")

    def build_payload(self, text: str, target_language: str) -> dict:
        payload = {
            "q": text,
            "source": self.source_language,
            "target": target_language,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key
        return payload

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        """Translate text into the target language.

        Raises:
            TranslationError: On network failure, a non-JSON body, or a
                response without translatedText
        """
        start_time = time.time()
        payload = self.build_payload(text, target_language)
        logger.debug(f"Translating {len(text)} chars {self.source_language}->{target_language}")

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.endpoint, json=payload) as response:
                    data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"Translation request failed: {e}")
            raise TranslationError(str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            logger.error("Translation request timed out")
            raise TranslationError("Translation request timed out") from e
        except ValueError as e:
            logger.error(f"Translation response was not JSON: {e}")
            raise TranslationError("Translation failed") from e

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not translated:
            logger.error(f"Translation response without translatedText: {data}")
            raise TranslationError("Translation failed")

        processing_time = time.time() - start_time
        logger.info(f"Translated to {target_language} in {processing_time:.3f}s")
        return TranslationResult(
            source_text=text,
            translated_text=translated,
            source_language=self.source_language,
            target_language=target_language,
            processing_time=processing_time,
        )
