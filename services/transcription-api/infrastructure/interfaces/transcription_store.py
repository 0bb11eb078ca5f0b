"""Abstract interface for transcription result storage."""

from abc import ABC, abstractmethod

from domain.models import NewTranscription, TranscriptionRecord


class TranscriptionStore(ABC):
    """Abstract base class for transcription result stores."""

    @abstractmethod
    def create(self, transcription: NewTranscription) -> TranscriptionRecord:
        """
        Persists a completed transcription.

        Returns:
            The stored record with its assigned id and creation time.

        Raises:
            StorePersistenceError: If the record cannot be saved.
        """

    @abstractmethod
    def get(self, transcription_id: str) -> TranscriptionRecord | None:
        """Returns the record with the given id, or None when unknown."""
