"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

MIB = 1024 * 1024

ALLOWED_EXTENSIONS = (
    ".mp3",
    ".wav",
    ".m4a",
    ".mp4",
    ".flac",
    ".ogg",
    ".webm",
    ".mpga",
    ".oga",
    ".opus",
)


class UploadConfig(BaseModel, frozen=True):
    """Where uploads land and what is accepted."""

    directory: Path = Path("uploads")
    max_upload_bytes: int = 100 * MIB
    allowed_extensions: tuple[str, ...] = ALLOWED_EXTENSIONS


class AudioEncoding(BaseModel, frozen=True):
    """Target encoding for converted files and segments."""

    codec: str = "libmp3lame"
    bitrate: str = "128k"
    extension: str = ".mp3"


class ChunkingConfig(BaseModel, frozen=True):
    """Thresholds that decide when and how an upload is split."""

    # Whisper rejects requests above 25 MB
    size_threshold_bytes: int = 20 * MIB
    duration_threshold_seconds: float = 600.0
    chunk_duration_seconds: float = 600.0
    min_segment_bytes: int = 1024
    encoding: AudioEncoding = AudioEncoding()


class MediaToolsConfig(BaseModel, frozen=True):
    """ffmpeg/ffprobe executables and the deadline applied to each run."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    timeout_seconds: float = 600.0


class OpenAIConfig(BaseModel, frozen=True):
    """OpenAI Whisper API configuration."""

    api_key: str
    model: str = "whisper-1"
    language: str = "pt"
    timeout_seconds: float = 300.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language_code: str = "pt"
    timeout_seconds: float = 300.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    transcription_provider: Literal["openai", "assemblyai"] = "openai"
    upload: UploadConfig
    chunking: ChunkingConfig
    media_tools: MediaToolsConfig
    openai: OpenAIConfig
    assemblyai: AssemblyAIConfig
    confidence_placeholder: float = 0.94


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    transcription_timeout = float(os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "300"))
    return AppConfig(
        transcription_provider=os.getenv("TRANSCRIPTION_PROVIDER", "openai"),
        upload=UploadConfig(
            directory=Path(os.getenv("UPLOAD_DIR", "uploads")),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(100 * MIB))),
        ),
        chunking=ChunkingConfig(
            size_threshold_bytes=int(
                os.getenv("CHUNK_SIZE_THRESHOLD_BYTES", str(20 * MIB))
            ),
            duration_threshold_seconds=float(
                os.getenv("CHUNK_DURATION_THRESHOLD_SECONDS", "600")
            ),
            chunk_duration_seconds=float(os.getenv("CHUNK_DURATION_SECONDS", "600")),
            min_segment_bytes=int(os.getenv("MIN_SEGMENT_BYTES", "1024")),
        ),
        media_tools=MediaToolsConfig(
            ffmpeg_path=os.getenv("FFMPEG_PATH", "ffmpeg"),
            ffprobe_path=os.getenv("FFPROBE_PATH", "ffprobe"),
            timeout_seconds=float(os.getenv("MEDIA_TOOL_TIMEOUT_SECONDS", "600")),
        ),
        openai=OpenAIConfig(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            model=os.getenv("OPENAI_TRANSCRIPTION_MODEL", "whisper-1"),
            timeout_seconds=transcription_timeout,
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            timeout_seconds=transcription_timeout,
        ),
    )
