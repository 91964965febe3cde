"""
Upstream outcome decoding.

The inference provider's HTTP response is decoded exactly once into one of a
closed set of outcomes; callers branch on the outcome type, never on raw
status codes.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw response received from the inference provider."""

    status_code: int
    content: bytes = b""
    content_type: Optional[str] = None

    def json(self) -> Any:
        return json.loads(self.content)


@dataclass(frozen=True)
class UpstreamSuccess:
    payload: Any


@dataclass(frozen=True)
class AuthFailed:
    status_code: int = 401


@dataclass(frozen=True)
class RateLimited:
    status_code: int = 429


@dataclass(frozen=True)
class ModelLoading:
    status_code: int = 503


@dataclass(frozen=True)
class OtherFailure:
    status_code: int
    detail: Optional[str] = None


UpstreamOutcome = Union[UpstreamSuccess, AuthFailed, RateLimited, ModelLoading, OtherFailure]


def _error_detail(response: UpstreamResponse) -> Optional[str]:
    """Pull the provider's own error message out of a failure body, if any."""
    try:
        body = response.json()
    except (ValueError, UnicodeDecodeError):
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, list) and error:
            return "; ".join(str(e) for e in error)
    return None


def decode_upstream_response(response: UpstreamResponse) -> UpstreamOutcome:
    """
    Classify a raw upstream response.

    A 2xx body that is not JSON is passed through as text.
    """
    status = response.status_code

    if 200 <= status < 300:
        try:
            payload = response.json()
        except (ValueError, UnicodeDecodeError):
            payload = response.content.decode("utf-8", errors="replace")
        return UpstreamSuccess(payload=payload)
    if status == 401:
        return AuthFailed()
    if status == 429:
        return RateLimited()
    if status == 503:
        return ModelLoading()
    return OtherFailure(status_code=status, detail=_error_detail(response))
