"""Unified sign-in route."""

from fastapi import APIRouter

from expohub.core.auth import LoginResult
from expohub.modules.auth.schemas import UnifiedLoginRequest
from expohub.modules.auth.services import LoginSvc


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResult,
    summary="Sign in",
    description=(
        "Check credentials against organizations, exhibitors and visitors "
        "(or only the roles given in `type`). No token is issued."
    ),
)
async def login(data: UnifiedLoginRequest, service: LoginSvc) -> LoginResult:
    """Sign in as whichever role matches first."""
    return await service.login(data)
