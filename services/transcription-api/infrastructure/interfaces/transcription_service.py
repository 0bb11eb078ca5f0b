"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import TranscribedText


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    async def transcribe(
        self, audio_path: Path, original_filename: str | None = None
    ) -> TranscribedText:
        """
        Transcribes one audio file with the configured language hint.

        Args:
            audio_path: File sent to the provider.
            original_filename: Name the user uploaded, used to pick the
                remediation message for format errors.

        Returns:
            The transcript text and, when reported, the audio duration.

        Raises:
            TranscriptionError: With a classified kind and user message.
        """
