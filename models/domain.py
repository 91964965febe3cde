"""
Domain models for the transcription relay.

None of these outlive a single request.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StoredUpload:
    """An accepted upload materialized in temporary storage."""

    path: Path
    original_filename: str
    content_type: Optional[str]
    size: int
    field_name: str


@dataclass(frozen=True)
class ModelInfo:
    """One entry of the model listing."""

    key: str
    name: str
    description: str


@dataclass(frozen=True)
class TranscriptionResult:
    """Successful relay result: raw upstream payload plus request metadata."""

    transcription: Any
    model: str
    original_filename: str
    file_size: int
    mimetype: Optional[str]
    processed_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def metadata(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "original_filename": self.original_filename,
            "file_size": self.file_size,
            "mimetype": self.mimetype,
            "processed_at": self.processed_at,
        }
