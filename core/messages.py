"""Centralized error and log message templates for the transcription relay."""


class ErrorMessages:
    """Centralized error message templates."""

    # Intake errors
    NO_FILE = "No audio file uploaded"
    NO_FILE_DETAILS = "Please provide an audio file in the request"
    TOO_MANY_FILES = "Too many files"
    TOO_MANY_FILES_DETAILS = "Only one audio file may be uploaded per request"
    INVALID_FILE_TYPE = "Invalid file type"
    INVALID_FILE_TYPE_DETAILS = "Only audio files are allowed"
    UNEXPECTED_FIELD = "Unexpected field"
    UNEXPECTED_FIELD_DETAILS = "Upload the audio file under the '{field}' field"
    FILE_TOO_LARGE = "File too large"
    FILE_TOO_LARGE_DETAILS = "Audio file must be smaller than {max}MB"

    # Configuration errors
    SERVER_CONFIG = "Server configuration error"
    SERVER_CONFIG_DETAILS = "HuggingFace API token not configured"

    # Upstream errors
    AUTH_FAILED = "Authentication failed"
    AUTH_FAILED_DETAILS = "Invalid HuggingFace API token"
    RATE_LIMITED = "Rate limit exceeded"
    RATE_LIMITED_DETAILS = (
        "Too many requests to HuggingFace API. Please try again later."
    )
    MODEL_LOADING = "Model loading"
    MODEL_LOADING_DETAILS = (
        "The AI model is currently loading. Please try again in a few moments."
    )
    TRANSCRIPTION_FAILED = "Transcription failed"
    TRANSCRIPTION_FAILED_DETAILS = "HuggingFace API error"

    # Transport errors
    REQUEST_TIMEOUT = "Request timeout"
    REQUEST_TIMEOUT_DETAILS = (
        "Transcription took too long. Please try with a shorter audio file."
    )

    # Everything else
    INTERNAL = "Internal server error"
    NOT_FOUND = "Not found"
    NOT_FOUND_DETAILS = "Route {method} {path} not found"
    VALIDATION = "Validation error"


class LogMessages:
    """Centralized log message templates."""

    # Startup
    TOKEN_MISSING = (
        "HF_API_TOKEN not set. Transcription requests will fail until the "
        "HuggingFace API token is configured."
    )
    INIT_HTTP_CLIENT = "Created HTTP client with connection pooling"

    # Intake
    UPLOAD_RECEIVED = "Transcription request received"
    UPLOAD_REJECTED = "Upload rejected: {reason}"
    UPLOAD_STAGED = "Staged upload {filename} ({size} bytes) at {path}"
    UPLOAD_CLEANUP_FAILED = "Failed to clean up temp file {path}: {error}"

    # Relay
    PROCESSING = (
        "Processing audio file: filename={filename}, mimetype={mimetype}, size={size}"
    )
    USING_MODEL = "Using model: {model}"
    TRANSCRIPTION_OK = "Transcription successful (model={model}, {elapsed:.2f}s)"
    UPSTREAM_FAILED = "Upstream returned HTTP {status}: {detail}"
    UPSTREAM_TIMEOUT = "Upstream did not respond within {timeout}s"
    CONFIG_MISSING = "Rejecting transcription: HuggingFace API token not configured"
