"""
HuggingFace Inference Client - Relays audio to the hosted inference API.

Implements IInferenceClient interface for dependency injection.
Uses a pooled httpx.AsyncClient shared across requests.
"""

from typing import Optional

import httpx  # type: ignore

from core.config import RelayConfig
from core.constants import (
    HTTP_KEEPALIVE_EXPIRY,
    HTTP_MAX_KEEPALIVE_CONNECTIONS,
)
from core.errors import ConfigurationError, UpstreamTimeoutError
from core.logger import logger
from core.messages import LogMessages
from interfaces.inference_client import IInferenceClient
from models.outcomes import UpstreamResponse


# Shared across all requests to reuse TCP connections
HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
    max_connections=None,
    keepalive_expiry=HTTP_KEEPALIVE_EXPIRY,
)


class HuggingFaceInferenceClient(IInferenceClient):
    """
    HuggingFace Inference API client with connection pooling.

    Posts raw audio bytes to ``<base_url>/<model_id>`` and hands back the raw
    response. Status classification is left to the caller.
    """

    def __init__(
        self,
        config: RelayConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Relay configuration (credential, base URL, timeout)
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                limits=HTTP_LIMITS,
                timeout=httpx.Timeout(self._config.timeout_seconds, pool=None),
                transport=self._transport,
            )
            logger.info(LogMessages.INIT_HTTP_CLIENT)
        return self._client

    def build_url(self, model_id: str) -> str:
        return f"{self._config.api_base_url.rstrip('/')}/{model_id}"

    async def transcribe(
        self, model_id: str, audio: bytes, content_type: str
    ) -> UpstreamResponse:
        """
        Send one transcription request upstream.

        Implements IInferenceClient.transcribe() interface.
        """
        if not self._config.has_credentials:
            raise ConfigurationError()

        client = await self._get_client()
        url = self.build_url(model_id)
        headers = {
            "Authorization": f"Bearer {self._config.api_token}",
            "Content-Type": content_type,
            "Accept": "application/json",
        }

        try:
            response = await client.post(url, content=audio, headers=headers)
        except httpx.PoolTimeout:
            # Never reached the upstream
            raise
        except httpx.TimeoutException as e:
            logger.warning(
                LogMessages.UPSTREAM_TIMEOUT.format(timeout=self._config.timeout_seconds)
            )
            raise UpstreamTimeoutError() from e

        return UpstreamResponse(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type"),
        )

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
