"""
Storage Infrastructure - Request-scoped temporary upload storage.
"""

from .upload_store import TempUploadStore

__all__ = [
    "TempUploadStore",
]
