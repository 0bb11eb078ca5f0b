"""Decides whether an upload must be split and plans its segments."""

import math

from config import ChunkingConfig


class ChunkingPolicy:
    """Applies the size and duration thresholds of a ChunkingConfig."""

    def __init__(self, config: ChunkingConfig):
        self._config = config

    def should_split(self, size_bytes: int, duration_seconds: float | None) -> bool:
        """
        Returns True when the file exceeds either threshold.

        A missing duration (probe failed) leaves only the size rule.
        """
        if size_bytes > self._config.size_threshold_bytes:
            return True
        if duration_seconds is None:
            return False
        return duration_seconds > self._config.duration_threshold_seconds

    def segment_count(self, duration_seconds: float) -> int:
        return math.ceil(duration_seconds / self._config.chunk_duration_seconds)

    def plan(self, duration_seconds: float) -> list[tuple[int, float, float]]:
        """
        Plans fixed-length segments covering the whole file.

        Returns:
            List of (index, start_seconds, duration_seconds). The last slice
            keeps the nominal length; the transcoder stops at end of input.
        """
        chunk = self._config.chunk_duration_seconds
        return [
            (index, index * chunk, chunk)
            for index in range(self.segment_count(duration_seconds))
        ]

    def is_usable_segment(self, size_bytes: int) -> bool:
        return size_bytes > self._config.min_segment_bytes
