"""In-process stand-ins for the external media tools and speech API."""

from pathlib import Path

from config import AudioEncoding
from domain import TranscribedText, UploadedAudio, messages
from exceptions import (
    MediaConversionError,
    MediaProbeError,
    TranscriptionError,
    TranscriptionErrorKind,
)
from infrastructure.interfaces import MediaProbe, MediaTranscoder, TranscriptionService


def make_error(kind: TranscriptionErrorKind, file_name: str = "audio.mp3") -> TranscriptionError:
    return TranscriptionError(file_name, kind, messages.transcription_message(kind, file_name))


def write_upload(directory: Path, filename: str, size: int, name: str | None = None) -> UploadedAudio:
    path = directory / (name or f"audioFile-1-1{Path(filename).suffix}")
    path.write_bytes(b"\x01" * size)
    return UploadedAudio(path=path, filename=filename, size=size, mime_type="audio/mpeg")


class FakeProbe(MediaProbe):
    def __init__(self, duration: float | None = 180.0):
        self.duration = duration
        self.calls: list[Path] = []

    async def probe_duration(self, path: Path) -> float:
        self.calls.append(path)
        if self.duration is None:
            raise MediaProbeError(path.name, "ffprobe exited with 1")
        return self.duration


class FakeTranscoder(MediaTranscoder):
    """Writes a file of a chosen size instead of running ffmpeg."""

    def __init__(
        self,
        segment_size: int = 2048,
        sizes: dict[int, int] | None = None,
        fail_indices: tuple[int, ...] = (),
        conversion_size: int = 512,
        fail_conversion: bool = False,
    ):
        self.segment_size = segment_size
        self.sizes = sizes or {}
        self.fail_indices = fail_indices
        self.conversion_size = conversion_size
        self.fail_conversion = fail_conversion
        self.calls: list[dict] = []

    async def transcode(
        self,
        source: Path,
        destination: Path,
        encoding: AudioEncoding,
        start_seconds: float | None = None,
        duration_seconds: float | None = None,
    ) -> None:
        self.calls.append(
            {
                "source": source,
                "destination": destination,
                "start": start_seconds,
                "duration": duration_seconds,
            }
        )
        if start_seconds is None:
            if self.fail_conversion:
                destination.write_bytes(b"partial")
                raise MediaConversionError(source.name, "ffmpeg exited with 1")
            destination.write_bytes(b"\x02" * self.conversion_size)
            return

        index = round(start_seconds / duration_seconds)
        if index in self.fail_indices:
            raise MediaConversionError(source.name, "ffmpeg exited with 1")
        destination.write_bytes(b"\x03" * self.sizes.get(index, self.segment_size))

    @property
    def segment_calls(self) -> list[dict]:
        return [c for c in self.calls if c["start"] is not None]


class FakeTranscriber(TranscriptionService):
    """Answers from a script: strings become text, errors are raised."""

    def __init__(self, script: list | None = None, default: str = "texto transcrito"):
        self.script = list(script or [])
        self.default = default
        self.calls: list[dict] = []

    async def transcribe(
        self, audio_path: Path, original_filename: str | None = None
    ) -> TranscribedText:
        self.calls.append(
            {
                "path": audio_path,
                "existed": audio_path.exists(),
                "original_filename": original_filename,
                "siblings": sorted(p.name for p in audio_path.parent.iterdir()),
            }
        )
        reply = self.script.pop(0) if self.script else self.default
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, TranscribedText):
            return reply
        return TranscribedText(text=reply)
