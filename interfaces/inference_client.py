"""
Inference Client Interface - Abstract interface for the speech-to-text provider.
"""

from abc import ABC, abstractmethod

from models.outcomes import UpstreamResponse


class IInferenceClient(ABC):
    """
    Abstract interface for sending audio to a hosted inference endpoint.

    Implementations:
    - infrastructure.huggingface.inference_client.HuggingFaceInferenceClient
    """

    @abstractmethod
    async def transcribe(
        self, model_id: str, audio: bytes, content_type: str
    ) -> UpstreamResponse:
        """
        Send one transcription request upstream.

        Exactly one HTTP request is made per call; there are no retries.

        Args:
            model_id: Canonical model identifier (e.g. 'openai/whisper-large-v3')
            audio: Raw audio bytes sent as the request body
            content_type: Media type sent in the Content-Type header

        Returns:
            The raw upstream response, whatever its status code

        Raises:
            UpstreamTimeoutError: If no response arrives within the timeout
        """
        pass

    async def close(self) -> None:
        """Release pooled connections, if any."""
        return None
