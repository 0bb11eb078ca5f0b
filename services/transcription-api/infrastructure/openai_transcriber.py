"""OpenAI Whisper implementation of the TranscriptionService interface."""

from pathlib import Path

import openai
from transcriber_common import setup_logging

from domain import messages
from domain.models import TranscribedText
from exceptions import TranscriptionError, TranscriptionErrorKind

from .interfaces import TranscriptionService

logger = setup_logging()


def classify_openai_error(error: Exception) -> TranscriptionErrorKind:
    """Maps an OpenAI SDK exception to a transcription failure class."""
    code = getattr(error, "code", None)
    if code == "invalid_api_key" or isinstance(error, openai.AuthenticationError):
        return TranscriptionErrorKind.INVALID_CREDENTIALS
    if code == "insufficient_quota":
        return TranscriptionErrorKind.QUOTA_EXCEEDED
    if code == "model_not_found":
        return TranscriptionErrorKind.MODEL_UNAVAILABLE
    if isinstance(error, openai.APIConnectionError):
        return TranscriptionErrorKind.CONNECTION
    if isinstance(error, openai.APIStatusError):
        if error.status_code == 413:
            return TranscriptionErrorKind.PAYLOAD_TOO_LARGE
        if error.status_code == 400:
            return TranscriptionErrorKind.BAD_REQUEST
        if error.status_code >= 500:
            return TranscriptionErrorKind.SERVER_ERROR
    return TranscriptionErrorKind.UNKNOWN


class OpenAIWhisperTranscriber(TranscriptionService):
    """Handles audio transcription using the OpenAI audio API."""

    def __init__(self, client: openai.AsyncOpenAI, model: str, language: str):
        self._client = client
        self._model = model
        self._language = language

    async def transcribe(
        self, audio_path: Path, original_filename: str | None = None
    ) -> TranscribedText:
        """
        Sends one file to the transcription endpoint.

        The API response carries no duration, so the result has none.
        """
        file_name = original_filename or audio_path.name
        try:
            with audio_path.open("rb") as audio_file:
                response = await self._client.audio.transcriptions.create(
                    file=audio_file,
                    model=self._model,
                    response_format="json",
                    language=self._language,
                )
        except openai.OpenAIError as e:
            kind = classify_openai_error(e)
            logger.exception(
                "OpenAI transcription failed",
                extra={"file_name": file_name, "error_kind": kind.value},
            )
            raise TranscriptionError(
                file_name, kind, messages.transcription_message(kind, file_name), e
            ) from e
        except OSError as e:
            logger.exception("Audio file unreadable", extra={"file_name": file_name})
            kind = TranscriptionErrorKind.UNKNOWN
            raise TranscriptionError(
                file_name, kind, messages.transcription_message(kind), e
            ) from e

        text = (response.text or "").strip()
        if not text:
            kind = TranscriptionErrorKind.EMPTY_RESULT
            raise TranscriptionError(file_name, kind, messages.transcription_message(kind))

        logger.info(
            "Audio transcription successful",
            extra={"file_name": file_name, "characters": len(text)},
        )
        return TranscribedText(text=text)
