"""
Upload Store Interface - Abstract interface for request-scoped upload storage.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager

from starlette.datastructures import UploadFile

from models.domain import StoredUpload


class IUploadStore(ABC):
    """
    Abstract interface for materializing uploads in temporary storage.

    Implementations:
    - infrastructure.storage.upload_store.TempUploadStore
    """

    @abstractmethod
    def stage(self, upload: UploadFile, field_name: str) -> AsyncContextManager[StoredUpload]:
        """
        Copy an upload to temporary storage for the duration of a block.

        The stored file is removed when the block exits, however it exits.

        Raises:
            PayloadTooLargeError: If the upload exceeds the size limit
        """
        pass

    @abstractmethod
    async def read(self, upload: StoredUpload) -> bytes:
        """Read the full contents of a staged upload."""
        pass

    @abstractmethod
    def get_max_size_bytes(self) -> int:
        """Maximum accepted upload size in bytes."""
        pass
