"""GSTIN verification API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from expohub.core.logging import get_client_ip
from expohub.modules.gstin.schemas import GstinErrorCode, GstinVerification, GstinVerifyRequest
from expohub.modules.gstin.service import GstinService, get_gstin_service


router = APIRouter(prefix="/gstin", tags=["gstin"])


@router.post(
    "/verify",
    response_model=GstinVerification,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Verify a GSTIN",
    description=(
        "Validate the format of a GSTIN and look up its registration. "
        "Failures are returned as a tagged result with an errorCode."
    ),
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": GstinVerification},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": GstinVerification},
    },
)
async def verify_gstin(
    data: GstinVerifyRequest,
    request: Request,
    service: Annotated[GstinService, Depends(get_gstin_service)],
) -> GstinVerification | JSONResponse:
    """Verify a GSTIN, rate-limited per client IP."""
    result = await service.verify(data.gstin, identifier=get_client_ip(request) or "global")
    if result.success:
        return result

    status_code = (
        status.HTTP_429_TOO_MANY_REQUESTS
        if result.error_code == GstinErrorCode.RATE_LIMIT_EXCEEDED
        else status.HTTP_400_BAD_REQUEST
    )
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
