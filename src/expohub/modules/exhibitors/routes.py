"""Exhibitor API routes."""

from typing import Any

from fastapi import APIRouter, status

from expohub.core.auth import LoginRequest, LoginResult
from expohub.modules.exhibitors.schemas import (
    EventRegistration,
    EventRegistrationResponse,
    ExhibitorCreate,
    ExhibitorCreateResponse,
    ExhibitorListItem,
    ExhibitorUpdate,
    ExhibitorUpdateResponse,
)
from expohub.modules.exhibitors.services import ExhibitorSvc


router = APIRouter(prefix="/exhibitors", tags=["exhibitors"])


@router.get(
    "",
    response_model=list[ExhibitorListItem],
    summary="List exhibitors",
)
async def list_exhibitors(service: ExhibitorSvc) -> list[ExhibitorListItem]:
    """List exhibitors with their event and organization names."""
    return await service.list_exhibitors()


@router.post(
    "",
    response_model=ExhibitorCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create exhibitor",
    description="Create an exhibitor. Without a password, a default one is issued and returned once.",
)
async def create_exhibitor(data: ExhibitorCreate, service: ExhibitorSvc) -> ExhibitorCreateResponse:
    """Create an exhibitor."""
    return await service.create_exhibitor(data)


@router.post(
    "/login",
    response_model=LoginResult,
    summary="Exhibitor sign-in",
)
async def login_exhibitor(data: LoginRequest, service: ExhibitorSvc) -> LoginResult:
    """Check exhibitor credentials."""
    return await service.authenticate(data.email, data.password)


@router.get(
    "/upcoming-events/{organization_id}",
    response_model=list[dict[str, Any]],
    summary="List upcoming events",
    description="Events of an organization starting today or later, excluding Cancelled and Completed ones.",
)
async def upcoming_events(organization_id: int, service: ExhibitorSvc) -> list[dict[str, Any]]:
    """List events an exhibitor can still register for."""
    return await service.upcoming_events(organization_id)


@router.post(
    "/register-event",
    response_model=EventRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register for event",
)
async def register_for_event(
    data: EventRegistration,
    service: ExhibitorSvc,
) -> EventRegistrationResponse:
    """Register an exhibitor for another event of the same organization."""
    return await service.register_for_event(data)


@router.patch(
    "/{exhibitor_id}",
    response_model=ExhibitorUpdateResponse,
    summary="Update exhibitor",
)
async def update_exhibitor(
    exhibitor_id: int,
    data: ExhibitorUpdate,
    service: ExhibitorSvc,
) -> ExhibitorUpdateResponse:
    """Update an exhibitor's profile."""
    return await service.update_exhibitor(exhibitor_id, data)
