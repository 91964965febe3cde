"""
Health Check API Routes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from internal.api.schemas import HealthResponse
from internal.api.utils import dump


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness probe. Always succeeds while the process is serving.",
    operation_id="health_check",
)
async def health_check(request: Request):
    """
    Health check endpoint.

    **Returns:**
    Fixed status literal, current timestamp and service version.
    """
    settings = request.app.state.settings
    return dump(
        HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=settings.app_version,
        )
    )
