"""UI-related data models."""

from dataclasses import dataclass, field
from typing import List, Optional

from .voice import Voice, NO_VOICE


@dataclass
class TranslatorState:
    """Everything the translator screen displays."""
    listening: bool = False
    interim_text: str = ""
    final_text: str = ""
    target_language: str = "es"
    voices: List[Voice] = field(default_factory=list)
    selected_voice_id: str = NO_VOICE
    error: Optional[str] = None
    translation: str = ""
    translating: bool = False
    peak_level: float = 0.0

    def recognized_text(self) -> str:
        """Finalized and interim transcript joined for display."""
        return (self.final_text + " " + self.interim_text).strip()
