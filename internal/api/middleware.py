"""
HTTP middleware for the relay API.
"""

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.constants import MULTIPART_OVERHEAD_BYTES
from core.errors import PayloadTooLargeError
from core.logger import logger
from core.messages import LogMessages
from internal.api.utils import relay_error_response


class UploadSizeLimitMiddleware:
    """
    Reject oversized request bodies before they are buffered.

    The limit applies to the uploaded file, so a body may exceed it by
    MULTIPART_OVERHEAD_BYTES of framing. A larger declared Content-Length is
    refused up front. Otherwise the body is counted as it streams in and the
    request fails as soon as the count passes the allowance, whether or not a
    length was declared. The exact per-file check is left to the upload store.
    """

    def __init__(self, app: ASGIApp, max_size_bytes: int):
        self.app = app
        self.max_size_bytes = max_size_bytes
        self.max_body_bytes = max_size_bytes + MULTIPART_OVERHEAD_BYTES

    def _too_large(self) -> PayloadTooLargeError:
        return PayloadTooLargeError(max_size_mb=self.max_size_bytes // (1024 * 1024))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if (
            content_length
            and content_length.isdigit()
            and int(content_length) > self.max_body_bytes
        ):
            logger.warning(
                LogMessages.UPLOAD_REJECTED.format(
                    reason=f"Content-Length {content_length} > {self.max_body_bytes}"
                )
            )
            await relay_error_response(self._too_large())(scope, receive, send)
            return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning(
                        LogMessages.UPLOAD_REJECTED.format(
                            reason=f"body passed {self.max_body_bytes} bytes"
                        )
                    )
                    raise self._too_large()
            return message

        async def tracked_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracked_send)
        except PayloadTooLargeError as e:
            # Raised by limited_receive in an app that did not render it
            if response_started:
                raise
            await relay_error_response(e)(scope, receive, send)
