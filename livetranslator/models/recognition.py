"""Speech recognition data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class RecognitionResult:
    """One recognized segment, either finalized or still in progress."""
    transcript: str
    is_final: bool
    confidence: float = 0.0
    stability: float = 0.0


@dataclass
class RecognitionEvent:
    """A batch of results delivered by the recognizer.

    Only the results from ``result_index`` onwards changed since the
    previous event; earlier entries are kept for context.
    """
    results: List[RecognitionResult]
    result_index: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def changed_results(self) -> List[RecognitionResult]:
        return self.results[self.result_index:]
