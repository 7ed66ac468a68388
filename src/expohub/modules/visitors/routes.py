"""Visitor API routes."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from expohub.core.auth import LoginRequest, LoginResult
from expohub.modules.visitors.schemas import (
    VisitorCreate,
    VisitorCreateResponse,
    VisitorListItem,
    VisitorLookupResponse,
)
from expohub.modules.visitors.services import VisitorSvc


router = APIRouter(prefix="/visitors", tags=["visitors"])


@router.get(
    "",
    response_model=list[VisitorListItem],
    summary="List visitors",
)
async def list_visitors(service: VisitorSvc) -> list[VisitorListItem]:
    """List visitors with their event name, newest first."""
    return await service.list_visitors()


@router.post(
    "",
    response_model=VisitorCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register visitor",
    description="Register a visitor and send their check-in code by email (and SMS when opted in).",
)
async def create_visitor(data: VisitorCreate, service: VisitorSvc) -> VisitorCreateResponse:
    """Register a visitor."""
    return await service.create_visitor(data)


@router.post(
    "/login",
    response_model=LoginResult,
    summary="Visitor sign-in",
    description="Check a visitor's password. The mobile number is also accepted when enabled.",
)
async def login_visitor(data: LoginRequest, service: VisitorSvc) -> LoginResult:
    """Check visitor credentials."""
    return await service.authenticate(data.email, data.password)


@router.get(
    "/code/{code}",
    response_model=VisitorLookupResponse,
    summary="Look up visitor by check-in code",
)
async def get_visitor_by_code(
    code: str,
    service: VisitorSvc,
    event_id: Annotated[int | None, Query(alias="eventId")] = None,
) -> VisitorLookupResponse:
    """Resolve a scanned visitor code, optionally checking the event."""
    return await service.get_by_code(code, event_id)
