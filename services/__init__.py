"""
Services Layer - Relay business logic.
"""

from .intake import extract_audio_upload
from .media_types import is_accepted_audio, resolve_content_type
from .model_catalog import ModelCatalog, resolve_model_name
from .transcription import TranscriptionRelayService

__all__ = [
    "extract_audio_upload",
    "is_accepted_audio",
    "resolve_content_type",
    "ModelCatalog",
    "resolve_model_name",
    "TranscriptionRelayService",
]
