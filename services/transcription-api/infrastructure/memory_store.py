"""In-memory implementation of the TranscriptionStore interface."""

import uuid
from datetime import datetime, timezone

from transcriber_common import setup_logging

from domain.models import NewTranscription, TranscriptionRecord
from exceptions import StorePersistenceError

from .interfaces import TranscriptionStore

logger = setup_logging()


class InMemoryTranscriptionStore(TranscriptionStore):
    """
    Keeps records in a dict for the lifetime of the process.

    Nothing is evicted and nothing survives a restart.
    """

    def __init__(self):
        self._records: dict[str, TranscriptionRecord] = {}

    def create(self, transcription: NewTranscription) -> TranscriptionRecord:
        try:
            record = TranscriptionRecord(
                **transcription.model_dump(),
                id=str(uuid.uuid4()),
                created_at=datetime.now(timezone.utc),
            )
        except Exception as e:
            logger.exception(
                "Transcription record rejected",
                extra={"file_name": transcription.filename},
            )
            raise StorePersistenceError(transcription.filename, e) from e
        self._records[record.id] = record
        logger.info(
            "Transcription stored",
            extra={"transcription_id": record.id, "file_name": record.filename},
        )
        return record

    def get(self, transcription_id: str) -> TranscriptionRecord | None:
        return self._records.get(transcription_id)

    def __len__(self) -> int:
        return len(self._records)
