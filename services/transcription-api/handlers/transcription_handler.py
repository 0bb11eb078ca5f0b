"""Handler for processing uploaded audio files."""

import time

from transcriber_common import setup_logging

from domain import NewTranscription, TempArtifacts, TranscriptionRecord, UploadedAudio, count_words
from infrastructure.interfaces import TranscriptionStore

from .chunked_pipeline import ChunkedTranscriptionPipeline

logger = setup_logging()


class TranscriptionHandler:
    """Orchestrates upload-to-record transcription."""

    def __init__(
        self,
        pipeline: ChunkedTranscriptionPipeline,
        store: TranscriptionStore,
        confidence: float | None,
    ):
        self._pipeline = pipeline
        self._store = store
        self._confidence = confidence

    async def process(self, audio: UploadedAudio) -> TranscriptionRecord:
        """
        Transcribes an uploaded file and stores the result.

        The upload and every file derived from it are deleted before this
        returns or raises.

        Args:
            audio: The saved upload. Ownership passes to this call.

        Returns:
            The stored TranscriptionRecord.

        Raises:
            MediaConversionError: If format normalization fails.
            SegmentationError: If the file cannot be split.
            TranscriptionError: If transcription fails for the whole file.
            AllSegmentsFailedError: If every segment failed.
            StorePersistenceError: If the record cannot be saved.
        """
        logger.info(
            "Processing audio",
            extra={"file_name": audio.filename, "size": audio.size, "mime_type": audio.mime_type},
        )
        started = time.monotonic()

        with TempArtifacts(audio.path) as artifacts:
            outcome = await self._pipeline.run(audio, artifacts)

        processing_time = time.monotonic() - started
        record = self._store.create(
            NewTranscription(
                filename=audio.filename,
                original_size=audio.size,
                mime_type=audio.mime_type,
                duration=outcome.duration,
                transcription_text=outcome.text,
                word_count=count_words(outcome.text),
                confidence=self._confidence,
                processing_time=processing_time,
                total_chunks=outcome.total_chunks,
            )
        )

        logger.info(
            "Audio processed",
            extra={
                "file_name": audio.filename,
                "transcription_id": record.id,
                "word_count": record.word_count,
                "total_chunks": record.total_chunks,
                "processing_time": round(processing_time, 3),
            },
        )
        return record
