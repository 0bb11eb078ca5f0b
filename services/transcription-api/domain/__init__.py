"""Domain layer exports."""

from .artifacts import TempArtifacts
from .chunking import ChunkingPolicy
from .models import (
    NewTranscription,
    PipelineOutcome,
    Segment,
    SegmentOutcome,
    StageResult,
    TranscribedText,
    TranscriptionRecord,
    UploadedAudio,
)
from .transcript_builder import TranscriptBuilder, count_words

__all__ = [
    "ChunkingPolicy",
    "NewTranscription",
    "PipelineOutcome",
    "Segment",
    "SegmentOutcome",
    "StageResult",
    "TempArtifacts",
    "TranscribedText",
    "TranscriptBuilder",
    "TranscriptionRecord",
    "UploadedAudio",
    "count_words",
]
