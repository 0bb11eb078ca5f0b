"""Domain models for the transcription service."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class UploadedAudio(BaseModel, frozen=True):
    """An upload saved to local disk, owned by the request that received it."""

    path: Path
    filename: str
    size: int
    mime_type: str


class Segment(BaseModel, frozen=True):
    """A time-bounded slice of the upload, re-encoded to the segment format."""

    index: int
    path: Path
    start_seconds: float
    duration_seconds: float


class TranscribedText(BaseModel, frozen=True):
    """What a provider returned for one file."""

    text: str
    duration: float | None = None


class SegmentOutcome(BaseModel, frozen=True):
    """Result of one segment's transcription attempt."""

    index: int
    text: str | None = None
    error_message: str | None = None
    duration: float | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_message is None


class PipelineOutcome(BaseModel, frozen=True):
    """Aggregated transcript of one upload."""

    text: str
    duration: float | None = None
    total_chunks: int | None = None


class NewTranscription(BaseModel, frozen=True):
    """A completed transcription that has not been stored yet."""

    filename: str
    original_size: int
    mime_type: str
    duration: float | None = None
    transcription_text: str
    word_count: int
    confidence: float | None = None
    processing_time: float
    total_chunks: int | None = None


class TranscriptionRecord(NewTranscription, frozen=True):
    """A stored transcription."""

    id: str
    created_at: datetime


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Success or failure of one pipeline stage."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StageResult[T]":
        return cls(error=error)
