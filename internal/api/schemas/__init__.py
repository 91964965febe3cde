from .common_schemas import (
    ErrorResponse,
    HealthResponse,
    ModelInfoSchema,
    ModelsResponse,
    TranscriptionMetadata,
    TranscriptionResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ModelInfoSchema",
    "ModelsResponse",
    "TranscriptionMetadata",
    "TranscriptionResponse",
]
