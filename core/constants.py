"""Constants for the transcription relay."""

# =============================================================================
# Models
# =============================================================================

# Short caller-facing key -> HuggingFace model identifier (insertion order is
# the order /api/models reports them in)
HF_MODELS = {
    "whisper-large": "openai/whisper-large-v3",
    "whisper-large-turbo": "openai/whisper-large-v3-turbo",
}

MODEL_DESCRIPTIONS = {
    "whisper-large": "Best accuracy, standard speed (1.5GB)",
    "whisper-large-turbo": "Best accuracy, faster and cheaper (newest, 1.5GB)",
}

DEFAULT_MODEL_KEY = "whisper-large"
UNKNOWN_MODEL_DESCRIPTION = "Unknown model"


# =============================================================================
# Upload Intake
# =============================================================================

UPLOAD_FIELD_NAME = "audio"

# Extensions accepted at intake even when the declared type is not audio/*
ACCEPTED_AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg", ".m4a", ".aac")

# Copy uploads to temp storage in 1MB chunks
UPLOAD_CHUNK_SIZE = 1024 * 1024

# Request bodies may exceed the file limit by this much multipart framing
MULTIPART_OVERHEAD_BYTES = 64 * 1024


# =============================================================================
# Content Types
# =============================================================================

GENERIC_CONTENT_TYPE = "application/octet-stream"
FALLBACK_AUDIO_CONTENT_TYPE = "audio/wav"

EXTENSION_CONTENT_TYPES = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
}


# =============================================================================
# HTTP Client Constants
# =============================================================================

# Keep-alive pool for the upstream client; total connections are unbounded
HTTP_MAX_KEEPALIVE_CONNECTIONS = 10
HTTP_KEEPALIVE_EXPIRY = 30.0

# Seconds a client should wait before retrying while the upstream loads a model
MODEL_LOADING_RETRY_AFTER = 20


# =============================================================================
# CORS
# =============================================================================

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:3000",
    "https://wondrous-madeleine-dbdb38.netlify.app",
)
