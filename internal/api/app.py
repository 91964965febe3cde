"""
FastAPI application factory for the Transcription Relay API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status as http_status  # type: ignore
from fastapi.exceptions import RequestValidationError  # type: ignore
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import Settings, get_settings
from core.errors import RelayError
from core.logger import logger
from core.messages import ErrorMessages
from internal.api.middleware import UploadSizeLimitMiddleware
from internal.api.routes.health_routes import router as health_router
from internal.api.routes.model_routes import router as model_router
from internal.api.routes.transcribe_routes import router as transcribe_router
from internal.api.utils import json_error_response, relay_error_response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.

    Startup validates configuration and bootstraps the DI container; shutdown
    closes the pooled upstream HTTP client.
    """
    from core.container import Container, bootstrap_container
    from core.dependencies import validate_configuration
    from interfaces.inference_client import IInferenceClient

    settings = app.state.settings
    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")
    logger.info(f"CORS origins: {settings.cors_origins}")

    app.state.configured = validate_configuration(settings)

    bootstrap_container(settings)
    logger.info("DI Container initialized")
    logger.info("Health check: GET /health")
    logger.info("Transcription endpoint: POST /api/transcribe")
    logger.info("Available models: GET /api/models")

    yield

    logger.info("========== Shutting down API service ==========")
    if Container.is_registered(IInferenceClient):
        await Container.resolve(IInferenceClient).close()
    logger.info("========== API service stopped successfully ==========")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    description = f"""
## Transcription Relay API

Relays uploaded audio to the HuggingFace Inference API and returns its
transcription in a stable JSON contract.

### Processing Flow

1. **Upload** - POST `multipart/form-data` with an `audio` file to `/api/transcribe`
2. **Relay** - The file bytes are sent to the selected Whisper model
3. **Response** - The provider's JSON plus request metadata

### Supported Audio Formats

MP3, WAV, OGG, M4A, AAC, FLAC (max {settings.max_upload_size_mb}MB)
    """

    tags_metadata = [
        {"name": "Transcription", "description": "Relay audio to the inference provider."},
        {"name": "Models", "description": "Models selectable with `?model=`."},
        {"name": "Health", "description": "Liveness probe."},
    ]

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=description,
        lifespan=lifespan,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(
        UploadSizeLimitMiddleware, max_size_bytes=settings.max_upload_size_bytes
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)  # /health
    app.include_router(model_router)  # /api/models
    app.include_router(transcribe_router)  # /api/transcribe

    @app.exception_handler(RelayError)
    async def relay_exception_handler(request: Request, exc: RelayError):
        """Relay errors raised outside the transcription route boundary."""
        logger.warning(f"{exc.error}: {exc.details}")
        return relay_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle validation errors - return 400 in the error format."""
        messages = []
        for e in exc.errors():
            field = e["loc"][-1] if e["loc"] else "unknown"
            messages.append(f"{field}: {e['msg']}")
        details = "; ".join(messages)
        logger.warning(f"Validation error: {details}")
        return json_error_response(
            error=ErrorMessages.VALIDATION,
            details=details,
            status_code=http_status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched routes (any method) are 404; other HTTP errors keep their status."""
        if exc.status_code in (
            http_status.HTTP_404_NOT_FOUND,
            http_status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return json_error_response(
                error=ErrorMessages.NOT_FOUND,
                details=ErrorMessages.NOT_FOUND_DETAILS.format(
                    method=request.method, path=request.url.path
                ),
                status_code=http_status.HTTP_404_NOT_FOUND,
            )
        logger.warning(f"HTTP error {exc.status_code}: {exc.detail}")
        return json_error_response(
            error=str(exc.detail),
            details=str(exc.detail),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with the error format."""
        logger.opt(exception=exc).error(f"Unhandled exception: {str(exc)}")
        return json_error_response(
            error=ErrorMessages.INTERNAL,
            details=str(exc),
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return app
