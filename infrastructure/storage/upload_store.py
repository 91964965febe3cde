"""
Temporary Upload Store - Request-scoped storage for uploaded audio.

Implements IUploadStore interface for dependency injection.
Every staged file is removed when its block exits, on success and on every
error path.
"""

import asyncio
import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from starlette.datastructures import UploadFile

from core.constants import UPLOAD_CHUNK_SIZE
from core.errors import PayloadTooLargeError
from core.logger import format_exception_short, logger
from core.messages import LogMessages
from interfaces.upload_store import IUploadStore
from models.domain import StoredUpload


class TempUploadStore(IUploadStore):
    """
    Stores uploads as ``<temp_dir>/<uuid><ext>`` while a request is processed.

    File I/O runs in the loop's default executor so the event loop is not
    blocked by large uploads.
    """

    def __init__(self, temp_dir: Path, max_size_bytes: int):
        self.temp_dir = Path(temp_dir)
        self._max_size_bytes = max_size_bytes
        self.temp_dir.mkdir(parents=True, exist_ok=True)

    def get_max_size_bytes(self) -> int:
        return self._max_size_bytes

    def _temp_path_for(self, filename: Optional[str]) -> Path:
        ext = Path(filename or "").suffix.lower()
        if not ext or len(ext) > 10 or not ext[1:].isalnum():
            ext = ".tmp"
        return self.temp_dir / f"{uuid.uuid4()}{ext}"

    async def _copy(self, upload: UploadFile, destination: Path) -> int:
        loop = asyncio.get_running_loop()
        max_mb = self._max_size_bytes // (1024 * 1024)
        size = 0

        f = await loop.run_in_executor(None, open, destination, "wb")
        try:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self._max_size_bytes:
                    raise PayloadTooLargeError(max_size_mb=max_mb)
                await loop.run_in_executor(None, f.write, chunk)
        finally:
            await loop.run_in_executor(None, f.close)

        return size

    async def _remove(self, path: Path) -> None:
        """Delete a staged file. Failures are logged, never raised."""
        loop = asyncio.get_running_loop()
        try:
            if path.exists():
                await loop.run_in_executor(None, os.remove, path)
        except Exception as e:
            logger.error(
                LogMessages.UPLOAD_CLEANUP_FAILED.format(
                    path=path, error=format_exception_short(e)
                )
            )

    @asynccontextmanager
    async def stage(
        self, upload: UploadFile, field_name: str
    ) -> AsyncIterator[StoredUpload]:
        """
        Copy an upload to temporary storage for the duration of the block.

        Implements IUploadStore.stage() interface.

        Raises:
            PayloadTooLargeError: If the upload exceeds the size limit
        """
        path = self._temp_path_for(upload.filename)
        try:
            size = await self._copy(upload, path)
            stored = StoredUpload(
                path=path,
                original_filename=upload.filename or "",
                content_type=upload.content_type,
                size=size,
                field_name=field_name,
            )
            logger.debug(
                LogMessages.UPLOAD_STAGED.format(
                    filename=stored.original_filename, size=size, path=path
                )
            )
            yield stored
        finally:
            await self._remove(path)

    async def read(self, upload: StoredUpload) -> bytes:
        """
        Read the full contents of a staged upload.

        Implements IUploadStore.read() interface.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, Path(upload.path).read_bytes)
