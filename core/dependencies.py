"""
Startup configuration checks and FastAPI dependency injection.

This module provides:
- Configuration validation run at startup
- FastAPI dependency injection functions for routes
"""

from pathlib import Path
from typing import Optional

from core.config import Settings, get_settings
from core.logger import logger
from core.messages import LogMessages


def validate_configuration(settings: Optional[Settings] = None) -> bool:
    """
    Check the settings the relay needs at runtime.

    A missing HF_API_TOKEN is only a warning: the service still starts and
    answers every transcription request with a configuration error.

    Returns:
        True if the service is fully configured
    """
    settings = settings or get_settings()
    ok = True

    if not settings.hf_api_token:
        logger.warning(LogMessages.TOKEN_MISSING)
        ok = False

    temp_dir = Path(settings.temp_dir)
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Temp directory not writable: {temp_dir} ({e})")
        raise

    logger.info(
        f"Upload limit: {settings.max_upload_size_mb}MB, "
        f"upstream timeout: {settings.upstream_timeout_seconds}s, "
        f"temp dir: {temp_dir}"
    )
    return ok


# =============================================================================
# FastAPI Dependency Injection
# =============================================================================


def get_relay_service_dependency():
    """
    FastAPI dependency for TranscriptionRelayService.

    Usage in routes:
        @router.post("/api/transcribe")
        async def transcribe(
            service: TranscriptionRelayService = Depends(get_relay_service_dependency)
        ):
            ...
    """
    from core.container import get_relay_service

    return get_relay_service()


def get_upload_store_dependency():
    """FastAPI dependency for IUploadStore."""
    from core.container import get_upload_store

    return get_upload_store()


def get_model_catalog_dependency():
    """FastAPI dependency for ModelCatalog."""
    from core.container import get_model_catalog

    return get_model_catalog()
