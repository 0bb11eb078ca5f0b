"""Validation and storage of incoming uploads."""

import os

from fastapi import UploadFile
from transcriber_common import setup_logging

from config import UploadConfig
from domain import UploadedAudio, messages
from exceptions import UploadValidationError
from utils import unique_path

logger = setup_logging()

READ_CHUNK_BYTES = 1024 * 1024


class UploadReceiver:
    """Accepts an uploaded audio file and writes it to the upload directory."""

    def __init__(self, config: UploadConfig):
        self._config = config

    def validate_filename(self, filename: str | None) -> str:
        """
        Checks the extension of the uploaded file name.

        Returns:
            The lower-cased extension, including the dot.

        Raises:
            UploadValidationError: If the name is missing or the extension
                is not accepted.
        """
        if not filename:
            raise UploadValidationError(messages.NO_FILE)
        extension = os.path.splitext(filename)[1].lower()
        if extension not in self._config.allowed_extensions:
            raise UploadValidationError(messages.UNSUPPORTED_FORMAT)
        return extension

    async def save(self, upload: UploadFile) -> UploadedAudio:
        """
        Streams the upload to a uniquely named file.

        Nothing is written until the extension has been accepted. A file that
        grows past the size limit, or an interrupted write, is deleted.

        Raises:
            UploadValidationError: If the file is rejected.
            OSError: If the file cannot be written.
        """
        extension = self.validate_filename(upload.filename)

        directory = self._config.directory
        directory.mkdir(parents=True, exist_ok=True)
        path = unique_path(directory, "audioFile", extension)

        size = 0
        try:
            with path.open("wb") as out:
                while True:
                    chunk = await upload.read(READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self._config.max_upload_bytes:
                        raise UploadValidationError(
                            messages.upload_too_large(self._config.max_upload_bytes)
                        )
                    out.write(chunk)
            if size == 0:
                raise UploadValidationError(messages.EMPTY_FILE)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info(
            "Upload received",
            extra={"file_name": upload.filename, "size": size, "path": str(path)},
        )
        return UploadedAudio(
            path=path,
            filename=upload.filename,
            size=size,
            mime_type=upload.content_type or "application/octet-stream",
        )
