"""
Shared fixtures for the relay tests.

The upstream provider is never contacted: tests either use StubInferenceClient
or a real HuggingFaceInferenceClient on top of httpx.MockTransport.
"""

import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep test runs from writing logs/ into the working tree
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from fastapi.testclient import TestClient  # noqa: E402

from core.config import RelayConfig, Settings  # noqa: E402
from core.container import Container  # noqa: E402
from core.dependencies import (  # noqa: E402
    get_model_catalog_dependency,
    get_relay_service_dependency,
    get_upload_store_dependency,
)
from infrastructure.storage.upload_store import TempUploadStore  # noqa: E402
from interfaces.inference_client import IInferenceClient  # noqa: E402
from internal.api.app import create_app  # noqa: E402
from models.outcomes import UpstreamResponse  # noqa: E402
from services.model_catalog import ModelCatalog  # noqa: E402
from services.transcription import TranscriptionRelayService  # noqa: E402


TEST_TOKEN = "hf_test_token"


class StubInferenceClient(IInferenceClient):
    """Records every call and answers with a canned response or exception."""

    def __init__(
        self,
        response: Optional[UpstreamResponse] = None,
        error: Optional[BaseException] = None,
        on_call: Optional[Callable[[], None]] = None,
    ):
        self.response = response or UpstreamResponse(
            status_code=200,
            content=b'{"text": "hello world"}',
            content_type="application/json",
        )
        self.error = error
        self.on_call = on_call
        self.calls: List[Tuple[str, bytes, str]] = []

    async def transcribe(self, model_id: str, audio: bytes, content_type: str):
        self.calls.append((model_id, audio, content_type))
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clear_container():
    Container.clear()
    yield
    Container.clear()


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def upload_store(temp_dir) -> TempUploadStore:
    return TempUploadStore(temp_dir=temp_dir, max_size_bytes=1024 * 1024)


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(api_token=TEST_TOKEN, api_base_url="https://hf.test/models")


@pytest.fixture
def stub_client() -> StubInferenceClient:
    return StubInferenceClient()


@pytest.fixture
def make_client(temp_dir, upload_store):
    """Build a TestClient around a relay with the given config and upstream stub."""

    def _make(
        inference_client: IInferenceClient,
        config: Optional[RelayConfig] = None,
        settings: Optional[Settings] = None,
    ) -> TestClient:
        config = config or RelayConfig(api_token=TEST_TOKEN)
        settings = settings or Settings(
            temp_dir=str(temp_dir), hf_api_token=config.api_token
        )
        service = TranscriptionRelayService(
            config=config, inference_client=inference_client, upload_store=upload_store
        )

        app = create_app(settings)
        app.dependency_overrides[get_relay_service_dependency] = lambda: service
        app.dependency_overrides[get_upload_store_dependency] = lambda: upload_store
        app.dependency_overrides[get_model_catalog_dependency] = lambda: ModelCatalog(
            config
        )
        return TestClient(app)

    return _make
