"""
Infrastructure Layer - External system integrations.

This layer contains implementations of interfaces defined in the interfaces/ layer.
Each subdirectory groups implementations by external dependency.

Structure:
- huggingface/  - HuggingFace Inference API client
- storage/      - Temporary upload storage
"""

from .huggingface import HuggingFaceInferenceClient
from .storage import TempUploadStore

__all__ = [
    # Upstream inference
    "HuggingFaceInferenceClient",
    # Upload storage
    "TempUploadStore",
]
