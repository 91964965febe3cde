"""
Models Layer - Domain models and upstream outcome types.
"""

from .domain import ModelInfo, StoredUpload, TranscriptionResult
from .outcomes import (
    AuthFailed,
    ModelLoading,
    OtherFailure,
    RateLimited,
    UpstreamOutcome,
    UpstreamResponse,
    UpstreamSuccess,
    decode_upstream_response,
)

__all__ = [
    # Domain
    "ModelInfo",
    "StoredUpload",
    "TranscriptionResult",
    # Upstream outcomes
    "UpstreamResponse",
    "UpstreamOutcome",
    "UpstreamSuccess",
    "AuthFailed",
    "RateLimited",
    "ModelLoading",
    "OtherFailure",
    "decode_upstream_response",
]
