"""
API utility functions for response formatting.

Error bodies always follow the format:
{
    "error": str,           # Short error label
    "details": str,         # Human-readable explanation
    "status": int,          # Upstream HTTP status (omit if none)
    "retryAfter": int       # Seconds before retrying (omit if none)
}
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.errors import RelayError
from internal.api.schemas.common_schemas import ErrorResponse


def dump(model: BaseModel) -> Dict[str, Any]:
    """Serialize a response model the way clients expect it (camelCase, no nulls)."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def error_response(
    error: str,
    details: str,
    status: Optional[int] = None,
    retry_after: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create an error response dictionary.

    Example:
        >>> error_response("Model loading", "Try again soon", retry_after=20)
        {'error': 'Model loading', 'details': 'Try again soon', 'retryAfter': 20}
    """
    return dump(
        ErrorResponse(
            error=error, details=details, status=status, retry_after=retry_after
        )
    )


def json_error_response(
    error: str,
    details: str,
    status_code: int = 500,
    upstream_status: Optional[int] = None,
    retry_after: Optional[int] = None,
) -> JSONResponse:
    """
    Create a JSONResponse with the error format.

    A Retry-After header accompanies retryAfter in the body.
    """
    headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
    return JSONResponse(
        status_code=status_code,
        content=error_response(
            error=error, details=details, status=upstream_status, retry_after=retry_after
        ),
        headers=headers,
    )


def relay_error_response(exc: RelayError) -> JSONResponse:
    """Convert a RelayError into its JSON response."""
    return json_error_response(
        error=exc.error,
        details=exc.details,
        status_code=exc.status_code,
        upstream_status=exc.upstream_status,
        retry_after=exc.retry_after,
    )
