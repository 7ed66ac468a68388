"""Upload business logic."""

import secrets
import time
from pathlib import PurePath
from typing import Annotated

import structlog
from fastapi import Depends

from expohub.core.constants import (
    GROUND_LAYOUT_CONTENT_TYPES,
    GROUND_LAYOUT_PREFIX,
    MAX_UPLOAD_BYTES,
)
from expohub.core.errors import BadRequestError
from expohub.core.storage import QrStorageDep
from expohub.modules.uploads.schemas import UploadResponse


logger = structlog.get_logger()


def ground_layout_filename(extension: str) -> str:
    """``ground-layout-<epoch ms>-<random>`` plus the original extension."""
    return f"{GROUND_LAYOUT_PREFIX}{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


class UploadService:
    """Service for storing uploaded event assets."""

    def __init__(self, storage: QrStorageDep) -> None:
        self.storage = storage

    async def upload_ground_layout(self, original_name: str | None, data: bytes) -> UploadResponse:
        """Store a ground layout image or PDF.

        Args:
            original_name: Client-side file name; only its extension is kept
            data: File content

        Raises:
            BadRequestError: If the file is empty, too large or not a JPG, PNG or PDF
        """
        extension = PurePath(original_name or "").suffix.lower()
        content_type = GROUND_LAYOUT_CONTENT_TYPES.get(extension)
        if content_type is None:
            raise BadRequestError(
                "Invalid file type. Only JPG, PNG, PDF allowed.",
                error_code="invalid_file_type",
            )
        if not data:
            raise BadRequestError("No file uploaded", error_code="file_required")
        if len(data) > MAX_UPLOAD_BYTES:
            raise BadRequestError(
                f"File too large. Maximum size is {MAX_UPLOAD_BYTES // (1024 * 1024)}MB.",
                error_code="file_too_large",
            )

        filename = ground_layout_filename(extension)
        stored = await self.storage.put(filename, data, content_type)
        logger.info("ground_layout_uploaded", filename=filename, size=len(data))
        return UploadResponse(
            filename=filename,
            original_name=original_name,
            url=stored.path,
            size=len(data),
        )


# Type alias for dependency injection
UploadSvc = Annotated[UploadService, Depends(UploadService)]
