"""Core business logic for transcript building."""

from . import messages
from .models import SegmentOutcome


def count_words(text: str) -> int:
    """Number of non-empty whitespace-delimited tokens."""
    return len(text.split())


class TranscriptBuilder:
    """Builds one ordered transcript from per-segment outcomes."""

    def placeholder(self, index: int, error_message: str) -> str:
        """Text inserted in place of a failed segment."""
        return messages.SEGMENT_PLACEHOLDER.format(number=index + 1, detail=error_message)

    def build(self, outcomes: list[SegmentOutcome]) -> str:
        """
        Joins segment texts in the order given with single spaces.

        Failed segments contribute their placeholder. No separator is added
        while the accumulated text is still empty.
        """
        text = ""
        for outcome in outcomes:
            part = self._part(outcome)
            if not part:
                continue
            text = f"{text} {part}" if text else part
        return text

    def total_duration(self, outcomes: list[SegmentOutcome]) -> float:
        """Sum of the durations the provider reported; 0.0 when none did."""
        return sum(o.duration for o in outcomes if o.duration)

    def _part(self, outcome: SegmentOutcome) -> str:
        if outcome.succeeded:
            return outcome.text or ""
        return self.placeholder(outcome.index, outcome.error_message)
