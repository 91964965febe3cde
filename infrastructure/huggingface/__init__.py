"""
HuggingFace Infrastructure - Hosted inference API integration.
"""

from .inference_client import HuggingFaceInferenceClient

__all__ = [
    "HuggingFaceInferenceClient",
]
