"""
Interface Layer - Abstract interfaces for dependency injection.

This layer defines contracts that infrastructure implementations must fulfill.
Services depend on these interfaces, not concrete implementations.
"""

from .inference_client import IInferenceClient
from .upload_store import IUploadStore

__all__ = [
    "IInferenceClient",
    "IUploadStore",
]
