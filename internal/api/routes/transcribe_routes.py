"""
Transcription Routes - Relays an uploaded audio file to the inference provider.

Success:
{
    "success": true,
    "transcription": {...},   // raw provider JSON
    "metadata": {...}
}

Error:
{
    "error": str,
    "details": str,
    "status": int,            // upstream failures only
    "retryAfter": int         // model loading only
}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from core.constants import UPLOAD_FIELD_NAME
from core.dependencies import get_relay_service_dependency, get_upload_store_dependency
from core.errors import ClientInputError, RelayError, UnclassifiedError
from core.logger import format_exception_short, logger
from core.messages import LogMessages
from interfaces.upload_store import IUploadStore
from internal.api.schemas import ErrorResponse, TranscriptionMetadata, TranscriptionResponse
from internal.api.utils import dump, relay_error_response
from services.intake import extract_audio_upload
from services.transcription import TranscriptionRelayService

router = APIRouter()


def _log_relay_error(exc: RelayError) -> None:
    if isinstance(exc, ClientInputError):
        logger.warning(f"Rejected upload: {exc.error} ({exc.details})")
    else:
        logger.error(f"Transcription error: {exc.error} ({exc.details})")


@router.post(
    "/api/transcribe",
    response_model=TranscriptionResponse,
    tags=["Transcription"],
    summary="Transcribe an uploaded audio file",
    description=f"""
Upload one audio file as `multipart/form-data` under the `{UPLOAD_FIELD_NAME}` field.
The bytes are relayed to the HuggingFace Inference API and its JSON answer is
returned as `transcription`.

Use `?model=<key>` to pick a model from `GET /api/models`; unknown keys fall back
to the default model.
""",
    responses={
        200: {"description": "Transcription successful"},
        400: {"model": ErrorResponse, "description": "No file or not an audio file"},
        408: {"model": ErrorResponse, "description": "Upstream timeout"},
        413: {"model": ErrorResponse, "description": "File too large"},
        429: {"model": ErrorResponse, "description": "Upstream rate limit"},
        500: {"model": ErrorResponse, "description": "Configuration, auth or upstream failure"},
        503: {"model": ErrorResponse, "description": "Model loading, retry later"},
    },
)
async def transcribe(
    request: Request,
    model: Optional[str] = Query(default=None, description="Model key, e.g. 'whisper-large'"),
    service: TranscriptionRelayService = Depends(get_relay_service_dependency),
    upload_store: IUploadStore = Depends(get_upload_store_dependency),
) -> JSONResponse:
    """Relay one uploaded file. The staged temp file never outlives the request."""
    logger.info(LogMessages.UPLOAD_RECEIVED)
    form = None

    try:
        form = await request.form()
        field_name, upload = extract_audio_upload(form)

        async with upload_store.stage(upload, field_name) as stored:
            result = await service.transcribe(stored, model)

        body = TranscriptionResponse(
            success=True,
            transcription=result.transcription,
            metadata=TranscriptionMetadata(**result.metadata()),
        )
        return JSONResponse(status_code=200, content=dump(body))

    except RelayError as e:
        _log_relay_error(e)
        return relay_error_response(e)

    except HTTPException:
        # Malformed multipart bodies; rendered by the app-level handler
        raise

    except Exception as e:
        logger.error(format_exception_short(e, "Unexpected transcription failure"))
        return relay_error_response(UnclassifiedError.from_exception(e))

    finally:
        if form is not None:
            await form.close()
