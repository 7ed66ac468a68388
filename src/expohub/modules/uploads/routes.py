"""Upload API routes."""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from expohub.core.constants import MAX_UPLOAD_BYTES
from expohub.modules.uploads.schemas import UploadResponse
from expohub.modules.uploads.services import UploadSvc


router = APIRouter(prefix="/upload", tags=["uploads"])


@router.post(
    "/ground-layout",
    response_model=UploadResponse,
    summary="Upload a ground layout",
    description=(
        "Store a JPG, PNG or PDF of up to 10MB. Pass the returned url to "
        "PUT /events/{event_id}/ground-layout to attach it to an event."
    ),
)
async def upload_ground_layout(
    file: Annotated[UploadFile, File(...)],
    service: UploadSvc,
) -> UploadResponse:
    """Upload a ground layout file."""
    # One byte over the limit is enough to reject the file
    data = await file.read(MAX_UPLOAD_BYTES + 1)
    return await service.upload_ground_layout(file.filename, data)
