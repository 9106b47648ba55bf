"""Translation data models."""

from dataclasses import dataclass, field
from datetime import datetime

# Target languages offered in the UI, in display order.
SUPPORTED_LANGUAGES = {
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "hi": "Hindi",
    "zh": "Chinese",
}


@dataclass
class TranslationResult:
    """Result of a translation request."""
    source_text: str
    translated_text: str
    source_language: str
    target_language: str
    processing_time: float
    timestamp: datetime = field(default_factory=datetime.now)
