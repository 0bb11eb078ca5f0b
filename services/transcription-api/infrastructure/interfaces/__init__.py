"""Infrastructure interface exports."""

from .media_tools import MediaProbe, MediaTranscoder
from .transcription_service import TranscriptionService
from .transcription_store import TranscriptionStore

__all__ = ["MediaProbe", "MediaTranscoder", "TranscriptionService", "TranscriptionStore"]
