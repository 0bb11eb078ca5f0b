"""Custom exceptions for the transcription-api service."""

from enum import Enum


class TranscriptionErrorKind(str, Enum):
    """Failure classes reported by a speech-to-text provider."""

    INVALID_CREDENTIALS = "invalid_credentials"
    QUOTA_EXCEEDED = "quota_exceeded"
    MODEL_UNAVAILABLE = "model_unavailable"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    BAD_REQUEST = "bad_request"
    SERVER_ERROR = "server_error"
    CONNECTION = "connection"
    EMPTY_RESULT = "empty_result"
    UNKNOWN = "unknown"

    @property
    def aborts_request(self) -> bool:
        """Whether retrying with another segment of the same file is pointless."""
        return self in _REQUEST_FATAL_KINDS


_REQUEST_FATAL_KINDS = frozenset(
    {
        TranscriptionErrorKind.INVALID_CREDENTIALS,
        TranscriptionErrorKind.QUOTA_EXCEEDED,
        TranscriptionErrorKind.MODEL_UNAVAILABLE,
    }
)


class UploadValidationError(Exception):
    """Raised when an upload is rejected before any processing starts."""

    def __init__(self, message: str):
        super().__init__(message)


class MediaConversionError(Exception):
    """Raised when ffmpeg fails to produce a usable output file."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to convert '{file_name}': {reason}")


class MediaProbeError(Exception):
    """Raised when the duration of a media file cannot be determined."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to probe '{file_name}': {reason}")


class SegmentationError(Exception):
    """Raised when a file that must be split yields no usable segments."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Failed to split '{file_name}': {reason}")


class TranscriptionError(Exception):
    """Raised when the speech-to-text provider fails for one file."""

    def __init__(
        self,
        file_name: str,
        kind: TranscriptionErrorKind,
        user_message: str,
        cause: Exception | None = None,
    ):
        self.file_name = file_name
        self.kind = kind
        self.user_message = user_message
        self.cause = cause
        super().__init__(f"Failed to transcribe '{file_name}' ({kind.value})")


class AllSegmentsFailedError(Exception):
    """Raised when every segment of a split file failed to transcribe."""

    def __init__(self, file_name: str, segment_count: int, first_error: TranscriptionError):
        self.file_name = file_name
        self.segment_count = segment_count
        self.first_error = first_error
        super().__init__(
            f"All {segment_count} segments of '{file_name}' failed to transcribe"
        )


class StorePersistenceError(Exception):
    """Raised when a transcription record cannot be saved."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to persist transcription of '{file_name}'")
