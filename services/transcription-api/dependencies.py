"""FastAPI dependency injection configuration."""

import assemblyai as aai
import openai
from transcriber_common import setup_logging

from config import AppConfig, load_config
from handlers import ChunkedTranscriptionPipeline, TranscriptionHandler, UploadReceiver
from infrastructure import (
    AssemblyAITranscriber,
    FFmpegTranscoder,
    FFprobeDurationProbe,
    InMemoryTranscriptionStore,
    OpenAIWhisperTranscriber,
)
from infrastructure.interfaces import TranscriptionService, TranscriptionStore

logger = setup_logging()

_config = load_config()

_config.upload.directory.mkdir(parents=True, exist_ok=True)


def _build_transcription_service(config: AppConfig) -> TranscriptionService:
    if config.transcription_provider == "assemblyai":
        aai.settings.api_key = config.assemblyai.api_key
        aai.settings.http_timeout = config.assemblyai.timeout_seconds
        _aai_config = aai.TranscriptionConfig(language_code=config.assemblyai.language_code)
        return AssemblyAITranscriber(
            aai.Transcriber(config=_aai_config), config.assemblyai.timeout_seconds
        )

    if not config.openai.api_key:
        logger.warning("OPENAI_API_KEY not set, transcription requests will fail")
    client = openai.AsyncOpenAI(
        api_key=config.openai.api_key,
        timeout=config.openai.timeout_seconds,
    )
    return OpenAIWhisperTranscriber(client, config.openai.model, config.openai.language)


_transcription_service = _build_transcription_service(_config)

_store = InMemoryTranscriptionStore()

_pipeline = ChunkedTranscriptionPipeline(
    probe=FFprobeDurationProbe(_config.media_tools),
    transcoder=FFmpegTranscoder(_config.media_tools),
    transcription_service=_transcription_service,
    config=_config.chunking,
    work_dir=_config.upload.directory,
)

_receiver = UploadReceiver(_config.upload)

logger.info(
    "Transcription service configured",
    extra={
        "provider": _config.transcription_provider,
        "upload_dir": str(_config.upload.directory),
    },
)


def get_store() -> TranscriptionStore:
    """Returns the process-wide transcription store."""
    return _store


def get_upload_receiver() -> UploadReceiver:
    """Returns the configured upload receiver."""
    return _receiver


def get_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return TranscriptionHandler(_pipeline, _store, _config.confidence_placeholder)
