"""Request handling layer exports."""

from .chunked_pipeline import ChunkedTranscriptionPipeline
from .transcription_handler import TranscriptionHandler
from .upload_receiver import UploadReceiver

__all__ = ["ChunkedTranscriptionPipeline", "TranscriptionHandler", "UploadReceiver"]
