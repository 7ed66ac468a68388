"""Pydantic schemas for file uploads."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """A stored upload.

    ``url`` is the value to save on the event: a ``/uploads/...`` path
    for local storage or a full URL with S3.
    """

    success: bool = True
    filename: str
    original_name: str | None = None
    url: str
    size: int
