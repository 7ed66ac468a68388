"""QR image rendering and storage."""

from typing import Annotated

from fastapi import Depends

from expohub.core.storage.qr import (
    QrStorage,
    StoredObject,
    get_qr_storage,
    render_qr_png,
)


QrStorageDep = Annotated[QrStorage, Depends(get_qr_storage)]


__all__ = [
    "QrStorage",
    "QrStorageDep",
    "StoredObject",
    "get_qr_storage",
    "render_qr_png",
]
