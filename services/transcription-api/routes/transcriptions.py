"""Transcription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from transcriber_common import setup_logging

from dependencies import get_handler, get_store, get_upload_receiver
from domain import messages
from exceptions import (
    AllSegmentsFailedError,
    MediaConversionError,
    SegmentationError,
    StorePersistenceError,
    TranscriptionError,
    UploadValidationError,
)
from handlers import TranscriptionHandler, UploadReceiver
from infrastructure.interfaces import TranscriptionStore
from response_models import TranscriptionResponse

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["transcriptions"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_handler)]
ReceiverDep = Annotated[UploadReceiver, Depends(get_upload_receiver)]
StoreDep = Annotated[TranscriptionStore, Depends(get_store)]


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    response_model_exclude_none=True,
)
async def transcribe(
    receiver: ReceiverDep,
    handler: HandlerDep,
    audio_file: Annotated[UploadFile | None, File(alias="audioFile")] = None,
) -> TranscriptionResponse:
    """
    Uploads an audio file and returns its transcription.

    Large or long files are split and transcribed segment by segment; a
    failed segment shows up as a bracketed note inside the text.
    """
    if audio_file is None:
        raise HTTPException(status_code=400, detail=messages.NO_FILE)

    try:
        upload = await receiver.save(audio_file)
    except UploadValidationError as e:
        logger.info("Upload rejected", extra={"file_name": audio_file.filename, "reason": str(e)})
        raise HTTPException(status_code=400, detail=str(e))
    except OSError:
        logger.exception("Upload could not be saved", extra={"file_name": audio_file.filename})
        raise HTTPException(status_code=500, detail=messages.UPLOAD_FAILED)

    try:
        record = await handler.process(upload)
    except MediaConversionError as e:
        raise HTTPException(
            status_code=500, detail=messages.CONVERSION_FAILED.format(detail=e.reason)
        )
    except SegmentationError:
        raise HTTPException(status_code=500, detail=messages.SEGMENTATION_FAILED)
    except TranscriptionError as e:
        raise HTTPException(status_code=500, detail=e.user_message)
    except AllSegmentsFailedError as e:
        raise HTTPException(
            status_code=500,
            detail=messages.ALL_SEGMENTS_FAILED.format(detail=e.first_error.user_message),
        )
    except StorePersistenceError:
        raise HTTPException(status_code=500, detail=messages.INTERNAL_ERROR)
    except Exception:
        logger.exception("Unexpected transcription failure", extra={"file_name": upload.filename})
        raise HTTPException(status_code=500, detail=messages.INTERNAL_ERROR)

    return TranscriptionResponse.from_record(record)


@router.get(
    "/transcriptions/{transcription_id}",
    response_model=TranscriptionResponse,
    response_model_exclude_none=True,
)
def get_transcription(transcription_id: str, store: StoreDep) -> TranscriptionResponse:
    """Returns a previously stored transcription."""
    try:
        record = store.get(transcription_id)
    except Exception as e:
        logger.error(f"Error getting transcription {transcription_id}: {e}")
        raise HTTPException(status_code=500, detail=messages.FETCH_FAILED)
    if record is None:
        raise HTTPException(status_code=404, detail=messages.NOT_FOUND)
    return TranscriptionResponse.from_record(record)
