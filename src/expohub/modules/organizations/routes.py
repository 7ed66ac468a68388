"""Organization and invite API routes."""

from typing import Any

from fastapi import APIRouter, status

from expohub.core.auth import LoginRequest, LoginResult
from expohub.modules.organizations.schemas import (
    InviteAccept,
    InviteAcceptResponse,
    InviteCreate,
    InviteCreateResponse,
    InviteValidation,
    OrganizationCreate,
    OrganizationCreateResponse,
)
from expohub.modules.organizations.services import InviteSvc, OrganizationSvc


router = APIRouter(prefix="/organizations", tags=["organizations"])


# ============================================================
# Invites
# ============================================================


@router.post(
    "/invites",
    response_model=InviteCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite an organization",
    description="Send a 48-hour invite link by email and/or SMS.",
)
async def create_invite(data: InviteCreate, service: InviteSvc) -> InviteCreateResponse:
    """Issue an organization invite."""
    return await service.create_invite(data)


@router.get(
    "/invites/{token}",
    response_model=InviteValidation,
    summary="Validate invite token",
    description="Check that an invite token is pending and unexpired.",
)
async def validate_invite(token: str, service: InviteSvc) -> InviteValidation:
    """Validate an invite token."""
    return await service.validate_invite(token)


@router.post(
    "/invites/{token}/accept",
    response_model=InviteAcceptResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Accept invite",
    description="Redeem an invite token and create the organization.",
)
async def accept_invite(token: str, data: InviteAccept, service: InviteSvc) -> InviteAcceptResponse:
    """Create an organization from an invite."""
    return await service.accept_invite(token, data)


# ============================================================
# Organizations
# ============================================================


@router.post(
    "",
    response_model=OrganizationCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
    description="Create an organization directly from the admin console.",
)
async def create_organization(
    data: OrganizationCreate, service: OrganizationSvc
) -> OrganizationCreateResponse:
    """Create an organization."""
    return await service.create_organization(data)


@router.get(
    "",
    summary="List organizations",
    description="List organizations, newest first. Credential columns are never returned.",
)
async def list_organizations(service: OrganizationSvc) -> list[dict[str, Any]]:
    """List organizations."""
    return await service.list_organizations()


@router.post(
    "/login",
    response_model=LoginResult,
    summary="Organization login",
    description="Check an organization's primary email and password.",
)
async def login_organization(data: LoginRequest, service: OrganizationSvc) -> LoginResult:
    """Authenticate an organization."""
    return await service.authenticate(data.email, data.password)
