"""Pydantic schemas for event operations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventCreate(BaseModel):
    """Event creation form. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    organization_id: int | None = None
    event_name: str | None = None
    description: str | None = None
    event_type: str | None = None
    event_mode: str | None = None
    industry: str | None = None
    organizer_name: str | None = None
    contact_person: str | None = None
    organizer_email: str | None = None
    organizer_mobile: str | None = None
    venue: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    registration: dict[str, Any] | None = None
    lead_capture: dict[str, Any] | None = None
    communication: dict[str, Any] | None = None
    status: str | None = None
    enable_stalls: bool | str | None = None
    stall_config: dict[str, Any] | None = None
    stall_types: list[Any] | None = None
    ground_layout_url: str | None = None

    def record_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class EventCreateResponse(BaseModel):
    success: bool = True
    event: dict[str, Any]
    qr_image_url: str | None = None
    qr_generated: bool = False
    email_sent: bool = False


class GroundLayoutUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ground_layout_url: str | None = Field(default=None)


class GroundLayoutResponse(BaseModel):
    success: bool = True
    event: dict[str, Any]
