"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
from pathlib import Path

import assemblyai as aai
import httpx
from transcriber_common import setup_logging

from domain import messages
from domain.models import TranscribedText
from exceptions import TranscriptionError, TranscriptionErrorKind

from .interfaces import TranscriptionService

logger = setup_logging()

_MESSAGE_HINTS = (
    (("authentication", "api key", "unauthorized"), TranscriptionErrorKind.INVALID_CREDENTIALS),
    (("insufficient", "balance", "quota", "credits"), TranscriptionErrorKind.QUOTA_EXCEEDED),
    (("speech model",), TranscriptionErrorKind.MODEL_UNAVAILABLE),
    (("too large", "exceeds"), TranscriptionErrorKind.PAYLOAD_TOO_LARGE),
    (("does not appear to contain audio", "unsupported", "transcoding"), TranscriptionErrorKind.BAD_REQUEST),
    (("server error", "internal error"), TranscriptionErrorKind.SERVER_ERROR),
)


def classify_assemblyai_error(error_text: str) -> TranscriptionErrorKind:
    """AssemblyAI reports failures as free text; match the known phrasings."""
    lowered = error_text.lower()
    for hints, kind in _MESSAGE_HINTS:
        if any(hint in lowered for hint in hints):
            return kind
    return TranscriptionErrorKind.UNKNOWN


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber, timeout_seconds: float):
        self._transcriber = transcriber
        self._timeout_seconds = timeout_seconds

    async def transcribe(
        self, audio_path: Path, original_filename: str | None = None
    ) -> TranscribedText:
        """
        Uploads and transcribes one file with AssemblyAI.

        The SDK blocks while polling, so it runs in a worker thread. The
        reported audio duration is kept for the aggregate total.

        A thread cannot be cancelled: when the deadline passes this call
        raises a CONNECTION error right away, but the worker keeps uploading
        and polling in the background until the SDK's own ``http_timeout``
        or the job itself ends. Its result is discarded. The worker only
        reads the file, so the caller may still delete it.
        """
        file_name = original_filename or audio_path.name
        try:
            transcript = await asyncio.wait_for(
                asyncio.to_thread(self._transcriber.transcribe, str(audio_path)),
                timeout=self._timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TransportError) as e:
            logger.exception("AssemblyAI unreachable", extra={"file_name": file_name})
            raise self._error(file_name, TranscriptionErrorKind.CONNECTION, e) from e
        except aai.types.TranscriptError as e:
            kind = classify_assemblyai_error(str(e))
            logger.exception(
                "AssemblyAI rejected the file",
                extra={"file_name": file_name, "error_kind": kind.value},
            )
            raise self._error(file_name, kind, e) from e

        if transcript.status == aai.TranscriptStatus.error:
            kind = classify_assemblyai_error(transcript.error or "")
            logger.error(
                "AssemblyAI transcription failed",
                extra={"file_name": file_name, "error": transcript.error, "error_kind": kind.value},
            )
            raise self._error(file_name, kind, Exception(transcript.error))

        text = (transcript.text or "").strip()
        if not text:
            raise self._error(file_name, TranscriptionErrorKind.EMPTY_RESULT)

        duration = transcript.audio_duration
        logger.info(
            "Audio transcription successful",
            extra={"file_name": file_name, "characters": len(text), "duration_seconds": duration},
        )
        return TranscribedText(text=text, duration=float(duration) if duration else None)

    def _error(
        self,
        file_name: str,
        kind: TranscriptionErrorKind,
        cause: Exception | None = None,
    ) -> TranscriptionError:
        return TranscriptionError(
            file_name, kind, messages.transcription_message(kind, file_name), cause
        )
