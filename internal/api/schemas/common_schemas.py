"""
API schemas for the transcription relay.

Bodies are serialized by alias (camelCase) and without null fields:

    success: {"success": true, "transcription": {...}, "metadata": {...}}
    error:   {"error": str, "details": str, "status"?: int, "retryAfter"?: int}
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Errors
# ============================================================================


class ErrorResponse(BaseModel):
    """Uniform error body returned by every failing endpoint."""

    error: str = Field(..., description="Short error label")
    details: str = Field(..., description="Human-readable explanation")
    status: Optional[int] = Field(
        default=None, description="Upstream HTTP status (upstream failures only)"
    )
    retry_after: Optional[int] = Field(
        default=None,
        alias="retryAfter",
        description="Seconds to wait before retrying (model loading only)",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {
                    "error": "No audio file uploaded",
                    "details": "Please provide an audio file in the request",
                },
                {
                    "error": "Model loading",
                    "details": "The AI model is currently loading. Please try again in a few moments.",
                    "retryAfter": 20,
                },
                {
                    "error": "Transcription failed",
                    "details": "HuggingFace API error",
                    "status": 400,
                },
            ]
        }


# ============================================================================
# Transcription
# ============================================================================


class TranscriptionMetadata(BaseModel):
    model: str = Field(..., description="Canonical model identifier used")
    original_filename: str = Field(..., alias="originalFilename")
    file_size: int = Field(..., alias="fileSize", description="Upload size in bytes")
    mimetype: Optional[str] = Field(
        default=None, description="Content type declared by the client"
    )
    processed_at: datetime = Field(..., alias="processedAt")

    class Config:
        populate_by_name = True


class TranscriptionResponse(BaseModel):
    success: bool = True
    transcription: Any = Field(
        ..., description="Raw JSON returned by the inference provider"
    )
    metadata: TranscriptionMetadata

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {
                    "success": True,
                    "transcription": {
                        "text": "Hello there.",
                        "chunks": [{"timestamp": [0.0, 1.2], "text": "Hello there."}],
                    },
                    "metadata": {
                        "model": "openai/whisper-large-v3",
                        "originalFilename": "memo.mp3",
                        "fileSize": 48213,
                        "mimetype": "audio/mpeg",
                        "processedAt": "2025-01-01T12:00:00.000000Z",
                    },
                }
            ]
        }


# ============================================================================
# Models & Health
# ============================================================================


class ModelInfoSchema(BaseModel):
    key: str = Field(..., description="Short model key accepted by ?model=")
    name: str = Field(..., description="Canonical upstream model identifier")
    description: str


class ModelsResponse(BaseModel):
    models: List[ModelInfoSchema]


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    timestamp: datetime
    version: str

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "status": "healthy",
                    "timestamp": "2025-01-01T12:00:00.000000Z",
                    "version": "1.0.0",
                }
            ]
        }
