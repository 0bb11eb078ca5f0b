"""Response models for the transcription API."""

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from domain import TranscriptionRecord


class TranscriptionResponse(BaseModel, alias_generator=to_camel, populate_by_name=True):
    """A transcription as returned to clients (camelCase keys)."""

    id: str
    filename: str
    transcription_text: str
    duration: float | None = None
    word_count: int
    confidence: float | None = None
    processing_time: float
    total_chunks: int | None = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: TranscriptionRecord) -> "TranscriptionResponse":
        return cls(
            id=record.id,
            filename=record.filename,
            transcription_text=record.transcription_text,
            duration=record.duration,
            word_count=record.word_count,
            confidence=record.confidence,
            processing_time=record.processing_time,
            total_chunks=record.total_chunks,
            created_at=record.created_at,
        )


class HealthResponse(BaseModel):
    """Static liveness payload."""

    status: str
    timestamp: datetime
    service: str
