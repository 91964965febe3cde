"""
Tests for upstream response decoding and error mapping.
"""

import json

import pytest

from core.errors import (
    ModelLoadingError,
    TranscriptionFailedError,
    UpstreamAuthenticationError,
    UpstreamRateLimitError,
)
from models.outcomes import (
    AuthFailed,
    ModelLoading,
    OtherFailure,
    RateLimited,
    UpstreamResponse,
    UpstreamSuccess,
    decode_upstream_response,
)
from services.transcription import outcome_to_error


def _response(status, body=None, raw=None):
    content = raw if raw is not None else json.dumps(body or {}).encode()
    return UpstreamResponse(status_code=status, content=content)


class TestDecodeUpstreamResponse:
    """Tests for decode_upstream_response."""

    def test_success_carries_raw_json(self):
        body = {"text": "hi", "chunks": [{"timestamp": [0.0, 1.0], "text": "hi"}]}
        outcome = decode_upstream_response(_response(200, body))

        assert outcome == UpstreamSuccess(payload=body)

    def test_success_with_non_json_body_passes_text_through(self):
        outcome = decode_upstream_response(_response(200, raw=b"plain text"))

        assert outcome == UpstreamSuccess(payload="plain text")

    @pytest.mark.parametrize(
        "status,expected",
        [(401, AuthFailed()), (429, RateLimited()), (503, ModelLoading())],
    )
    def test_classified_statuses(self, status, expected):
        assert decode_upstream_response(_response(status, {"error": "x"})) == expected

    def test_other_status_keeps_upstream_error_detail(self):
        outcome = decode_upstream_response(_response(400, {"error": "Malformed audio"}))

        assert outcome == OtherFailure(status_code=400, detail="Malformed audio")

    def test_other_status_joins_error_lists(self):
        outcome = decode_upstream_response(_response(422, {"error": ["a", "b"]}))

        assert outcome == OtherFailure(status_code=422, detail="a; b")

    @pytest.mark.parametrize("raw", [b"<html>Bad Gateway</html>", b"", b'{"message": "no error key"}'])
    def test_other_status_without_detail(self, raw):
        outcome = decode_upstream_response(_response(502, raw=raw))

        assert outcome == OtherFailure(status_code=502, detail=None)


class TestOutcomeToError:
    """Tests for mapping failures to caller-facing errors."""

    def test_auth_failure_is_a_server_error(self):
        error = outcome_to_error(AuthFailed())

        assert isinstance(error, UpstreamAuthenticationError)
        assert error.status_code == 500
        assert error.to_dict() == {
            "error": "Authentication failed",
            "details": "Invalid HuggingFace API token",
        }

    def test_rate_limited_has_no_retry_after(self):
        error = outcome_to_error(RateLimited())

        assert isinstance(error, UpstreamRateLimitError)
        assert error.status_code == 429
        assert "retryAfter" not in error.to_dict()

    def test_model_loading_has_retry_after(self):
        error = outcome_to_error(ModelLoading())

        assert isinstance(error, ModelLoadingError)
        assert error.status_code == 503
        assert error.to_dict()["retryAfter"] == 20

    def test_other_failure(self):
        error = outcome_to_error(OtherFailure(status_code=400, detail="Malformed audio"))

        assert isinstance(error, TranscriptionFailedError)
        assert error.status_code == 500
        assert error.to_dict() == {
            "error": "Transcription failed",
            "details": "Malformed audio",
            "status": 400,
        }

    def test_other_failure_default_detail(self):
        error = outcome_to_error(OtherFailure(status_code=500))

        assert error.to_dict()["details"] == "HuggingFace API error"

    def test_success_is_not_an_error(self):
        with pytest.raises(TypeError):
            outcome_to_error(UpstreamSuccess(payload={}))
