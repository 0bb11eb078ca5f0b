"""Abstract interfaces for external media tools."""

from abc import ABC, abstractmethod
from pathlib import Path

from config import AudioEncoding


class MediaProbe(ABC):
    """Read-only inspection of media files."""

    @abstractmethod
    async def probe_duration(self, path: Path) -> float:
        """
        Returns the duration of a media file.

        Args:
            path: File to inspect.

        Returns:
            Duration in seconds.

        Raises:
            MediaProbeError: If the duration cannot be determined.
        """


class MediaTranscoder(ABC):
    """Re-encodes media files, optionally cutting a time range."""

    @abstractmethod
    async def transcode(
        self,
        source: Path,
        destination: Path,
        encoding: AudioEncoding,
        start_seconds: float | None = None,
        duration_seconds: float | None = None,
    ) -> None:
        """
        Writes source, or the requested slice of it, to destination.

        Args:
            source: Input media file.
            destination: Output file, overwritten if present.
            encoding: Target codec and bitrate.
            start_seconds: Offset of the slice, from the beginning when None.
            duration_seconds: Length of the slice, up to the end when None.

        Raises:
            MediaConversionError: If the transcoder fails or times out.
        """
