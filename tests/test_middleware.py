"""
Tests for UploadSizeLimitMiddleware at the ASGI level.
"""

import json

import pytest

from core.constants import MULTIPART_OVERHEAD_BYTES
from internal.api.middleware import UploadSizeLimitMiddleware

MIB = 1024 * 1024


def http_scope(headers=()):
    return {
        "type": "http",
        "method": "POST",
        "path": "/api/transcribe",
        "headers": [(k.encode(), v.encode()) for k, v in headers],
    }


class ChunkedBody:
    """ASGI receive callable that hands out the body one chunk at a time."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.consumed = 0

    async def __call__(self):
        if self.consumed == len(self.chunks):
            return {"type": "http.disconnect"}
        chunk = self.chunks[self.consumed]
        self.consumed += 1
        return {
            "type": "http.request",
            "body": chunk,
            "more_body": self.consumed < len(self.chunks),
        }


async def drain_and_ok(scope, receive, send):
    """App that reads the whole body before answering 200."""
    while True:
        message = await receive()
        if not message.get("more_body"):
            break
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


class SentMessages(list):
    async def __call__(self, message):
        self.append(message)

    @property
    def status(self):
        return next(m["status"] for m in self if m["type"] == "http.response.start")

    @property
    def json(self):
        body = b"".join(m.get("body", b"") for m in self if m["type"] == "http.response.body")
        return json.loads(body)


class TestUploadSizeLimitMiddleware:
    @pytest.mark.asyncio
    async def test_streaming_body_stops_at_limit(self):
        middleware = UploadSizeLimitMiddleware(drain_and_ok, max_size_bytes=MIB)
        receive = ChunkedBody([b"\0" * MIB] * 8)
        sent = SentMessages()

        await middleware(http_scope(), receive, sent)

        assert sent.status == 413
        assert sent.json == {
            "error": "File too large",
            "details": "Audio file must be smaller than 1MB",
        }
        assert receive.consumed == 2

    @pytest.mark.asyncio
    async def test_declared_length_rejected_without_reading(self):
        middleware = UploadSizeLimitMiddleware(drain_and_ok, max_size_bytes=MIB)
        receive = ChunkedBody([b"\0" * MIB] * 2)
        sent = SentMessages()
        length = str(MIB + MULTIPART_OVERHEAD_BYTES + 1)

        await middleware(http_scope([("content-length", length)]), receive, sent)

        assert sent.status == 413
        assert receive.consumed == 0

    @pytest.mark.asyncio
    async def test_multipart_framing_allowance(self):
        middleware = UploadSizeLimitMiddleware(drain_and_ok, max_size_bytes=MIB)
        body = [b"\0" * MIB, b"\0" * MULTIPART_OVERHEAD_BYTES]
        length = str(MIB + MULTIPART_OVERHEAD_BYTES)
        sent = SentMessages()

        await middleware(http_scope([("content-length", length)]), ChunkedBody(body), sent)

        assert sent.status == 200

    @pytest.mark.asyncio
    async def test_non_http_scopes_pass_through(self):
        seen = []

        async def app(scope, receive, send):
            seen.append(scope["type"])

        middleware = UploadSizeLimitMiddleware(app, max_size_bytes=MIB)
        await middleware({"type": "lifespan"}, None, None)

        assert seen == ["lifespan"]
