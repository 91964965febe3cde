"""
Tests for TempUploadStore: staging, size limits and guaranteed cleanup.
"""

import io
from unittest.mock import patch

import pytest
from starlette.datastructures import Headers, UploadFile

from core.errors import PayloadTooLargeError
from infrastructure.storage.upload_store import TempUploadStore


def make_upload(data: bytes, filename="memo.mp3", content_type="audio/mpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestStage:
    """Tests for TempUploadStore.stage()."""

    @pytest.mark.asyncio
    async def test_stages_file_and_removes_it(self, upload_store, temp_dir):
        async with upload_store.stage(make_upload(b"abc123"), "audio") as stored:
            assert stored.path.exists()
            assert stored.path.parent == temp_dir
            assert stored.path.suffix == ".mp3"
            assert stored.path.read_bytes() == b"abc123"
            assert stored.size == 6
            assert stored.original_filename == "memo.mp3"
            assert stored.content_type == "audio/mpeg"
            assert stored.field_name == "audio"

            assert await upload_store.read(stored) == b"abc123"

        assert not stored.path.exists()
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_removes_file_when_block_raises(self, upload_store, temp_dir):
        with pytest.raises(RuntimeError):
            async with upload_store.stage(make_upload(b"abc"), "audio") as stored:
                raise RuntimeError("relay blew up")

        assert not stored.path.exists()
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_oversized_upload_is_rejected_and_removed(self, temp_dir):
        store = TempUploadStore(temp_dir=temp_dir, max_size_bytes=1024 * 1024)
        data = b"x" * (1024 * 1024 + 1)

        with pytest.raises(PayloadTooLargeError) as exc_info:
            async with store.stage(make_upload(data), "audio"):
                pytest.fail("block must not run for oversized uploads")

        assert exc_info.value.status_code == 413
        assert exc_info.value.to_dict() == {
            "error": "File too large",
            "details": "Audio file must be smaller than 1MB",
        }
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_at_exact_limit_is_accepted(self, temp_dir):
        store = TempUploadStore(temp_dir=temp_dir, max_size_bytes=1024)

        async with store.stage(make_upload(b"x" * 1024), "audio") as stored:
            assert stored.size == 1024

    @pytest.mark.asyncio
    async def test_cleanup_failure_is_logged_not_raised(self, upload_store, temp_dir):
        with patch(
            "infrastructure.storage.upload_store.os.remove",
            side_effect=PermissionError("read-only filesystem"),
        ) as mock_remove, patch("infrastructure.storage.upload_store.logger") as mock_logger:
            async with upload_store.stage(make_upload(b"abc"), "audio"):
                pass

        mock_remove.assert_called_once()
        mock_logger.error.assert_called_once()
        assert "read-only filesystem" in mock_logger.error.call_args[0][0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "filename,suffix",
        [("memo.WAV", ".wav"), ("memo", ".tmp"), (None, ".tmp"), ("weird.$$$", ".tmp")],
    )
    async def test_temp_suffix(self, upload_store, filename, suffix):
        async with upload_store.stage(make_upload(b"a", filename=filename), "audio") as stored:
            assert stored.path.suffix == suffix

    @pytest.mark.asyncio
    async def test_each_upload_gets_its_own_path(self, upload_store):
        async with upload_store.stage(make_upload(b"a"), "audio") as first:
            async with upload_store.stage(make_upload(b"b"), "audio") as second:
                assert first.path != second.path


def test_creates_temp_dir(tmp_path):
    target = tmp_path / "nested" / "uploads"
    store = TempUploadStore(temp_dir=target, max_size_bytes=10)

    assert target.is_dir()
    assert store.get_max_size_bytes() == 10
