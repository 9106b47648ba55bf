"""Speech synthesis voice model."""

from dataclasses import dataclass, field
from typing import List

# Voice id used when no voice is available or selected.
NO_VOICE = "no-voice"


@dataclass
class Voice:
    """A voice offered by the speech synthesis engine."""
    voice_id: str
    name: str
    languages: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        if self.languages:
            return f"{self.name} ({', '.join(self.languages)})"
        return self.name
