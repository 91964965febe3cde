"""
Error taxonomy for the transcription relay.

Every error that can leave the service carries its own HTTP status and
renders to the caller-facing body:

    {"error": str, "details": str, "status"?: int, "retryAfter"?: int}
"""

from typing import Any, Dict, Optional

from core.constants import MODEL_LOADING_RETRY_AFTER, UPLOAD_FIELD_NAME
from core.messages import ErrorMessages


class RelayError(Exception):
    """Base class for errors converted into the uniform error body."""

    status_code: int = 500
    error: str = ErrorMessages.INTERNAL
    default_details: str = ""

    def __init__(
        self,
        details: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        retry_after: Optional[int] = None,
        upstream_status: Optional[int] = None,
    ):
        self.details = details if details is not None else self.default_details
        if status_code is not None:
            self.status_code = status_code
        self.retry_after = retry_after
        self.upstream_status = upstream_status
        super().__init__(self.details)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error, "details": self.details}
        if self.upstream_status is not None:
            body["status"] = self.upstream_status
        if self.retry_after is not None:
            body["retryAfter"] = self.retry_after
        return body


# =============================================================================
# Client input (4xx, never a server fault)
# =============================================================================


class ClientInputError(RelayError):
    status_code = 400


class NoFileUploadedError(ClientInputError):
    error = ErrorMessages.NO_FILE
    default_details = ErrorMessages.NO_FILE_DETAILS


class TooManyFilesError(ClientInputError):
    error = ErrorMessages.TOO_MANY_FILES
    default_details = ErrorMessages.TOO_MANY_FILES_DETAILS


class UnsupportedMediaTypeError(ClientInputError):
    error = ErrorMessages.INVALID_FILE_TYPE
    default_details = ErrorMessages.INVALID_FILE_TYPE_DETAILS


class UnexpectedFieldError(ClientInputError):
    error = ErrorMessages.UNEXPECTED_FIELD
    default_details = ErrorMessages.UNEXPECTED_FIELD_DETAILS.format(
        field=UPLOAD_FIELD_NAME
    )


class PayloadTooLargeError(ClientInputError):
    status_code = 413
    error = ErrorMessages.FILE_TOO_LARGE

    def __init__(self, max_size_mb: int):
        self.max_size_mb = max_size_mb
        super().__init__(ErrorMessages.FILE_TOO_LARGE_DETAILS.format(max=max_size_mb))


# =============================================================================
# Server configuration
# =============================================================================


class ConfigurationError(RelayError):
    status_code = 500
    error = ErrorMessages.SERVER_CONFIG
    default_details = ErrorMessages.SERVER_CONFIG_DETAILS


# =============================================================================
# Upstream (classified by the upstream status code)
# =============================================================================


class UpstreamError(RelayError):
    status_code = 500


class UpstreamAuthenticationError(UpstreamError):
    # The credential belongs to the server, so the caller sees a 500
    status_code = 500
    error = ErrorMessages.AUTH_FAILED
    default_details = ErrorMessages.AUTH_FAILED_DETAILS


class UpstreamRateLimitError(UpstreamError):
    status_code = 429
    error = ErrorMessages.RATE_LIMITED
    default_details = ErrorMessages.RATE_LIMITED_DETAILS


class ModelLoadingError(UpstreamError):
    status_code = 503
    error = ErrorMessages.MODEL_LOADING
    default_details = ErrorMessages.MODEL_LOADING_DETAILS

    def __init__(self, retry_after: int = MODEL_LOADING_RETRY_AFTER):
        super().__init__(retry_after=retry_after)


class TranscriptionFailedError(UpstreamError):
    status_code = 500
    error = ErrorMessages.TRANSCRIPTION_FAILED
    default_details = ErrorMessages.TRANSCRIPTION_FAILED_DETAILS


# =============================================================================
# Transport
# =============================================================================


class TransportError(RelayError):
    status_code = 500


class UpstreamTimeoutError(TransportError):
    status_code = 408
    error = ErrorMessages.REQUEST_TIMEOUT
    default_details = ErrorMessages.REQUEST_TIMEOUT_DETAILS


# =============================================================================
# Anything else
# =============================================================================


class UnclassifiedError(RelayError):
    status_code = 500
    error = ErrorMessages.INTERNAL

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnclassifiedError":
        return cls(str(exc) or type(exc).__name__)
