"""
FastAPI Service - Main entry point for the Transcription Relay API.

Run from the project root:
    python cmd/api/main.py
    uvicorn internal.api.app:create_app --factory --port 3001
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import uvicorn  # type: ignore  # noqa: E402

from core.config import get_settings  # noqa: E402


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "internal.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level="info" if settings.debug else "warning",
    )
