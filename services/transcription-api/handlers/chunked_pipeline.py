"""Probe, split, transcribe and reassemble one uploaded audio file."""

from pathlib import Path

from transcriber_common import setup_logging

from config import ChunkingConfig
from domain import (
    ChunkingPolicy,
    PipelineOutcome,
    Segment,
    SegmentOutcome,
    StageResult,
    TempArtifacts,
    TranscribedText,
    TranscriptBuilder,
    UploadedAudio,
)
from exceptions import (
    AllSegmentsFailedError,
    MediaConversionError,
    MediaProbeError,
    SegmentationError,
    TranscriptionError,
)
from infrastructure.interfaces import MediaProbe, MediaTranscoder, TranscriptionService
from utils import unique_path

logger = setup_logging()

CONVERTED_EXTENSIONS = (".opus",)


class ChunkedTranscriptionPipeline:
    """
    Turns one audio file into one transcript.

    Stages run strictly one after another. Each stage reports a StageResult;
    ``run`` decides which failures end the request and raises those.
    Every file the pipeline creates is registered with the request's
    TempArtifacts before it is written.
    """

    def __init__(
        self,
        probe: MediaProbe,
        transcoder: MediaTranscoder,
        transcription_service: TranscriptionService,
        config: ChunkingConfig,
        work_dir: Path,
        transcript_builder: TranscriptBuilder | None = None,
    ):
        self._probe = probe
        self._transcoder = transcoder
        self._transcription_service = transcription_service
        self._config = config
        self._policy = ChunkingPolicy(config)
        self._work_dir = work_dir
        self._builder = transcript_builder or TranscriptBuilder()

    async def run(self, audio: UploadedAudio, artifacts: TempArtifacts) -> PipelineOutcome:
        """
        Transcribes an uploaded file, splitting it when it is too big or long.

        Raises:
            MediaConversionError: If format normalization fails.
            SegmentationError: If a file that must be split cannot be.
            TranscriptionError: If a single-shot call fails, or a segment
                fails with an error that affects every segment.
            AllSegmentsFailedError: If no segment could be transcribed.
        """
        normalized = await self.normalize(audio.path, audio.filename, artifacts)
        if not normalized.ok:
            raise normalized.error
        audio_path = normalized.value

        size = audio_path.stat().st_size
        probed = await self.probe(audio_path)
        duration = probed.value if probed.ok else None

        if not self._policy.should_split(size, duration):
            logger.info(
                "Transcribing without splitting",
                extra={"file_name": audio.filename, "size": size, "duration_seconds": duration},
            )
            result = await self.transcribe_file(audio_path, audio.filename)
            artifacts.release(audio_path)
            if not result.ok:
                raise result.error
            return PipelineOutcome(
                text=result.value.text,
                duration=result.value.duration or duration,
            )

        if duration is None:
            raise SegmentationError(audio.filename, "duration is unknown")

        split = await self.split(audio_path, audio.filename, duration, artifacts)
        if not split.ok:
            raise split.error
        segments = split.value
        artifacts.release(audio_path)

        outcomes = await self.transcribe_segments(segments, audio.filename, artifacts)
        reported = self._builder.total_duration(outcomes)
        return PipelineOutcome(
            text=self._builder.build(outcomes),
            duration=reported or duration,
            total_chunks=len(segments),
        )

    async def normalize(
        self, path: Path, file_name: str, artifacts: TempArtifacts
    ) -> StageResult[Path]:
        """
        Converts formats the provider rejects into the segment encoding.

        On success the source is deleted and the converted path returned.
        On failure both the source and any partial output are deleted.
        """
        if not file_name.lower().endswith(CONVERTED_EXTENSIONS):
            return StageResult.success(path)

        encoding = self._config.encoding
        converted = artifacts.track(path.with_suffix(encoding.extension))
        logger.info(
            "Converting audio format",
            extra={"file_name": file_name, "target": encoding.extension},
        )
        try:
            await self._transcoder.transcode(path, converted, encoding)
            if not converted.exists():
                raise MediaConversionError(file_name, "output file was not created")
            if converted.stat().st_size == 0:
                raise MediaConversionError(file_name, "output file is empty")
        except MediaConversionError as e:
            logger.error(
                "Audio conversion failed",
                extra={"file_name": file_name, "reason": e.reason},
            )
            artifacts.release(converted)
            artifacts.release(path)
            return StageResult.failure(e)

        artifacts.release(path)
        return StageResult.success(converted)

    async def probe(self, path: Path) -> StageResult[float]:
        """Probes the duration; a failure only degrades the split decision."""
        try:
            return StageResult.success(await self._probe.probe_duration(path))
        except MediaProbeError as e:
            logger.warning(
                "Duration unavailable, deciding on size only",
                extra={"file_name": path.name, "reason": e.reason},
            )
            return StageResult.failure(e)

    async def split(
        self,
        path: Path,
        file_name: str,
        duration: float,
        artifacts: TempArtifacts,
    ) -> StageResult[list[Segment]]:
        """
        Cuts the file into fixed-length re-encoded segments.

        Segments that fail to encode, or come out at or below the minimum
        size, are deleted and dropped from the list.
        """
        encoding = self._config.encoding
        plan = self._policy.plan(duration)
        logger.info(
            "Splitting audio",
            extra={
                "file_name": file_name,
                "duration_seconds": duration,
                "planned_segments": len(plan),
            },
        )

        segments: list[Segment] = []
        for index, start, length in plan:
            segment_path = artifacts.track(
                unique_path(self._work_dir, "chunk", f"-{index:03d}{encoding.extension}")
            )
            try:
                await self._transcoder.transcode(
                    path,
                    segment_path,
                    encoding,
                    start_seconds=start,
                    duration_seconds=length,
                )
            except MediaConversionError as e:
                logger.warning(
                    "Segment encoding failed, skipping",
                    extra={"file_name": file_name, "segment": index, "reason": e.reason},
                )
                artifacts.release(segment_path)
                continue

            size = segment_path.stat().st_size if segment_path.exists() else 0
            if not self._policy.is_usable_segment(size):
                logger.warning(
                    "Segment too small, skipping",
                    extra={"file_name": file_name, "segment": index, "size": size},
                )
                artifacts.release(segment_path)
                continue

            segments.append(
                Segment(
                    index=index,
                    path=segment_path,
                    start_seconds=start,
                    duration_seconds=length,
                )
            )

        if not segments:
            return StageResult.failure(
                SegmentationError(file_name, "no usable segments were produced")
            )
        logger.info(
            "Audio split",
            extra={"file_name": file_name, "segments": len(segments)},
        )
        return StageResult.success(segments)

    async def transcribe_file(
        self, path: Path, file_name: str
    ) -> StageResult[TranscribedText]:
        try:
            return StageResult.success(
                await self._transcription_service.transcribe(path, file_name)
            )
        except TranscriptionError as e:
            return StageResult.failure(e)

    async def transcribe_segments(
        self,
        segments: list[Segment],
        file_name: str,
        artifacts: TempArtifacts,
    ) -> list[SegmentOutcome]:
        """
        Transcribes segments one at a time, in order.

        A failed segment becomes a placeholder and the run goes on, unless
        the error would hit every remaining segment too (credentials, quota,
        model). Each segment file is deleted right after its attempt.
        """
        outcomes: list[SegmentOutcome] = []
        first_error: TranscriptionError | None = None

        for position, segment in enumerate(segments, start=1):
            logger.info(
                "Transcribing segment",
                extra={"file_name": file_name, "segment": segment.index, "position": position, "total": len(segments)},
            )
            result = await self.transcribe_file(segment.path, segment.path.name)
            artifacts.release(segment.path)

            if result.ok:
                outcomes.append(
                    SegmentOutcome(
                        index=segment.index,
                        text=result.value.text,
                        duration=result.value.duration,
                    )
                )
                continue

            error = result.error
            if error.kind.aborts_request:
                logger.error(
                    "Segment failure aborts the request",
                    extra={"file_name": file_name, "segment": segment.index, "error_kind": error.kind.value},
                )
                raise error

            logger.warning(
                "Segment transcription failed, inserting placeholder",
                extra={"file_name": file_name, "segment": segment.index, "error_kind": error.kind.value},
            )
            first_error = first_error or error
            outcomes.append(
                SegmentOutcome(index=segment.index, error_message=error.user_message)
            )

        if first_error is not None and not any(o.succeeded for o in outcomes):
            raise AllSegmentsFailedError(file_name, len(segments), first_error)
        return outcomes
