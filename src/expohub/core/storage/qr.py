"""QR image rendering and storage of event assets.

QR images and uploaded ground layouts are written to local disk under
``upload_dir`` or, with the S3 backend, uploaded to the configured
bucket. An S3 upload failure falls back to local disk so the caller still
gets a usable file.
"""

import asyncio
import io
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import boto3
import qrcode
import structlog
from qrcode.constants import ERROR_CORRECT_H

from expohub.config import settings
from expohub.core.constants import QR_BORDER, QR_IMAGE_SIZE


logger = structlog.get_logger()

QR_FOLDER = "qrs"
ASSET_CACHE_CONTROL = "public, max-age=31536000"


def render_qr_png(data: str, size: int = QR_IMAGE_SIZE) -> bytes:
    """Render ``data`` as a square PNG with high error correction.

    Args:
        data: Text encoded in the QR code (usually a registration link)
        size: Output width and height in pixels

    Returns:
        PNG bytes
    """
    code = qrcode.QRCode(error_correction=ERROR_CORRECT_H, border=QR_BORDER)
    code.add_data(data)
    code.make(fit=True)
    image = code.make_image(fill_color="black", back_color="white").get_image()
    image = image.resize((size, size))

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def qr_object_name(event_id: int | str) -> str:
    return f"event-{event_id}.png"


@dataclass(frozen=True)
class StoredObject:
    """Where a stored image ended up.

    Attributes:
        path: Value persisted on the row (local ``/uploads/...`` path or full URL)
        url: Publicly reachable URL
    """

    path: str
    url: str


class QrStorage:
    """Store event QR images and uploaded files on local disk or S3."""

    def __init__(
        self,
        backend: str = "local",
        upload_dir: str | Path = "uploads",
        public_base_url: str = "",
        s3_client: Any | None = None,
        bucket: str | None = None,
        cloudfront_domain: str | None = None,
    ) -> None:
        self.backend = backend
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.s3_client = s3_client
        self.bucket = bucket
        self.cloudfront_domain = cloudfront_domain

    @classmethod
    def from_settings(cls) -> "QrStorage":
        """Build storage from application settings."""
        s3_client = None
        if settings.storage_backend == "s3" and settings.s3_bucket:
            s3_client = boto3.client(
                "s3",
                region_name=settings.aws_region,
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
            )
        return cls(
            backend=settings.storage_backend,
            upload_dir=settings.upload_dir,
            public_base_url=settings.public_base_url,
            s3_client=s3_client,
            bucket=settings.s3_bucket,
            cloudfront_domain=settings.cloudfront_domain,
        )

    @property
    def uses_s3(self) -> bool:
        return self.backend == "s3" and self.s3_client is not None and bool(self.bucket)

    async def store(self, event_id: int | str, png: bytes) -> StoredObject:
        """Persist a QR image for an event.

        Args:
            event_id: Owning event
            png: Image bytes from :func:`render_qr_png`

        Returns:
            StoredObject with the path to persist and its public URL
        """
        return await self.put(f"{QR_FOLDER}/{qr_object_name(event_id)}", png, "image/png")

    async def put(self, key: str, data: bytes, content_type: str) -> StoredObject:
        """Persist bytes under ``key``, relative to the upload root.

        Args:
            key: Object key such as ``qrs/event-1.png``
            data: File content
            content_type: MIME type recorded with the S3 object

        Returns:
            StoredObject with the path to persist and its public URL
        """
        if self.uses_s3:
            try:
                return await self._put_s3(key, data, content_type)
            except Exception as exc:  # boto3 raises ClientError, BotoCoreError and network errors
                logger.warning("s3_upload_failed", key=key, error=str(exc))
        return await self._put_local(key, data)

    async def _put_s3(self, key: str, data: bytes, content_type: str) -> StoredObject:
        await asyncio.to_thread(
            self.s3_client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
            CacheControl=ASSET_CACHE_CONTROL,
        )
        if self.cloudfront_domain:
            url = f"https://{self.cloudfront_domain}/{key}"
        else:
            url = f"https://{self.bucket}.s3.amazonaws.com/{key}"
        logger.info("asset_stored", backend="s3", key=key)
        return StoredObject(path=url, url=url)

    async def _put_local(self, key: str, data: bytes) -> StoredObject:
        target = self.upload_dir / key

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)
        path = f"/uploads/{key}"
        logger.info("asset_stored", backend="local", path=path)
        return StoredObject(path=path, url=self.url_for(path))

    def url_for(self, path: str | None) -> str | None:
        """Resolve a stored path to a full URL; absolute URLs pass through."""
        if not path:
            return None
        if path.startswith("http"):
            return path
        return f"{self.public_base_url}{path}"


@lru_cache
def get_qr_storage() -> QrStorage:
    """Process-wide QR storage (FastAPI dependency)."""
    return QrStorage.from_settings()
