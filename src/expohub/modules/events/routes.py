"""Event API routes."""

from typing import Any

from fastapi import APIRouter, status

from expohub.modules.events.schemas import (
    EventCreate,
    EventCreateResponse,
    GroundLayoutResponse,
    GroundLayoutUpdate,
)
from expohub.modules.events.services import EventSvc


router = APIRouter(prefix="/events", tags=["events"])


@router.get(
    "",
    response_model=list[dict[str, Any]],
    summary="List events",
)
async def list_events(service: EventSvc) -> list[dict[str, Any]]:
    """List all events, newest first."""
    return await service.list_events()


@router.post(
    "",
    response_model=EventCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
    description=(
        "Create an event with a unique registration token. A QR code for the "
        "registration link is stored and the organizer is emailed."
    ),
)
async def create_event(data: EventCreate, service: EventSvc) -> EventCreateResponse:
    """Create an event."""
    return await service.create_event(data)


@router.get(
    "/by-token/{token}",
    response_model=dict[str, Any],
    summary="Get event by registration token",
)
async def get_event_by_token(token: str, service: EventSvc) -> dict[str, Any]:
    """Public event details for the registration page."""
    return await service.get_by_token(token)


@router.put(
    "/{event_id}/ground-layout",
    response_model=GroundLayoutResponse,
    summary="Update ground layout",
)
async def update_ground_layout(
    event_id: int,
    data: GroundLayoutUpdate,
    service: EventSvc,
) -> GroundLayoutResponse:
    """Set the ground layout image for an event."""
    return await service.update_ground_layout(event_id, data)
