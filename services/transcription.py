"""
Transcription Relay Service - Business logic for relaying audio upstream.

Orchestrates one transcription request: reads the staged upload, makes
exactly one call to the inference provider, and turns the provider's answer
into either a TranscriptionResult or a RelayError.
"""

import time
from typing import Optional

from core.config import RelayConfig
from core.errors import (
    ConfigurationError,
    ModelLoadingError,
    RelayError,
    TranscriptionFailedError,
    UnclassifiedError,
    UpstreamAuthenticationError,
    UpstreamRateLimitError,
)
from core.logger import format_exception_short, logger
from core.messages import LogMessages
from interfaces.inference_client import IInferenceClient
from interfaces.upload_store import IUploadStore
from models.domain import StoredUpload, TranscriptionResult
from models.outcomes import (
    AuthFailed,
    ModelLoading,
    OtherFailure,
    RateLimited,
    UpstreamOutcome,
    UpstreamSuccess,
    decode_upstream_response,
)
from services.media_types import resolve_content_type
from services.model_catalog import ModelCatalog


def outcome_to_error(outcome: UpstreamOutcome) -> RelayError:
    """Map a failed upstream outcome to the caller-facing error."""
    if isinstance(outcome, AuthFailed):
        return UpstreamAuthenticationError()
    if isinstance(outcome, RateLimited):
        return UpstreamRateLimitError()
    if isinstance(outcome, ModelLoading):
        return ModelLoadingError()
    if isinstance(outcome, OtherFailure):
        return TranscriptionFailedError(
            outcome.detail, upstream_status=outcome.status_code
        )
    raise TypeError(f"Not a failure outcome: {outcome!r}")


class TranscriptionRelayService:
    """
    Stateless service relaying one staged upload to the inference provider.

    Uses dependency injection through interfaces:
    - IInferenceClient: For the outbound transcription call
    - IUploadStore: For reading the staged upload
    """

    def __init__(
        self,
        config: RelayConfig,
        inference_client: IInferenceClient,
        upload_store: IUploadStore,
        catalog: Optional[ModelCatalog] = None,
    ):
        self.config = config
        self.inference_client = inference_client
        self.upload_store = upload_store
        self.catalog = catalog or ModelCatalog(config)

        logger.info(
            f"TranscriptionRelayService initialized "
            f"(client={self.inference_client.__class__.__name__}, "
            f"store={self.upload_store.__class__.__name__})"
        )

    async def transcribe(
        self, upload: StoredUpload, model_key: Optional[str] = None
    ) -> TranscriptionResult:
        """
        Relay a staged upload to the inference provider.

        Args:
            upload: Upload already materialized by the upload store
            model_key: Optional caller-supplied model key

        Returns:
            TranscriptionResult wrapping the provider's raw JSON

        Raises:
            RelayError: Every failure, already classified for the caller
        """
        if not self.config.has_credentials:
            logger.error(LogMessages.CONFIG_MISSING)
            raise ConfigurationError()

        try:
            logger.info(
                LogMessages.PROCESSING.format(
                    filename=upload.original_filename,
                    mimetype=upload.content_type,
                    size=upload.size,
                )
            )

            audio = await self.upload_store.read(upload)

            model_name = self.catalog.resolve(model_key)
            logger.info(LogMessages.USING_MODEL.format(model=model_name))

            content_type = resolve_content_type(
                upload.content_type, upload.original_filename
            )

            start = time.time()
            response = await self.inference_client.transcribe(
                model_name, audio, content_type
            )
            outcome = decode_upstream_response(response)

            if not isinstance(outcome, UpstreamSuccess):
                error = outcome_to_error(outcome)
                logger.warning(
                    LogMessages.UPSTREAM_FAILED.format(
                        status=response.status_code, detail=error.details
                    )
                )
                raise error

            logger.info(
                LogMessages.TRANSCRIPTION_OK.format(
                    model=model_name, elapsed=time.time() - start
                )
            )

            return TranscriptionResult(
                transcription=outcome.payload,
                model=model_name,
                original_filename=upload.original_filename,
                file_size=upload.size,
                mimetype=upload.content_type,
            )

        except RelayError:
            raise
        except Exception as e:
            logger.error(format_exception_short(e, "Transcription error"))
            raise UnclassifiedError.from_exception(e) from e
