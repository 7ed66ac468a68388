"""Pydantic schemas for exhibitor operations."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expohub.core.auth import IssuedCredentials
from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH


class ExhibitorCreate(BaseModel):
    """Exhibitor creation form. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    organization_id: int | None = None
    event_id: int | None = None
    company_name: str | None = None
    gst_number: str | None = None
    address: str | None = None
    industry: str | None = None
    logo_url: str | None = None
    contact_person: str | None = None
    email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    password: str | None = None
    stall_number: str | None = None
    stall_category: str | None = None
    access_status: str | None = None
    lead_capture: dict[str, Any] | None = None
    communication: dict[str, Any] | None = None


class ExhibitorUpdate(BaseModel):
    """Partial profile update; only fields sent are written."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_name: str | None = None
    gst_number: str | None = None
    address: str | None = None
    industry: str | None = None
    logo_url: str | None = None
    contact_person: str | None = None
    email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    event_id: int | None = None
    stall_number: str | None = None
    stall_category: str | None = None
    access_status: str | None = None
    lead_capture: dict[str, Any] | None = None
    communication: dict[str, Any] | None = None

    def record_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ExhibitorResponse(BaseModel):
    """Exhibitor data in responses; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int | None = None
    event_id: int | None = None
    company_name: str | None = None
    gst_number: str | None = None
    address: str | None = None
    industry: str | None = None
    logo_url: str | None = None
    contact_person: str | None = None
    email: str | None = None
    mobile: str | None = None
    stall_number: str | None = None
    stall_category: str | None = None
    access_status: str | None = None
    lead_capture: dict[str, Any] | None = None
    communication: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ExhibitorListItem(ExhibitorResponse):
    event_name: str | None = None
    organization_name: str | None = None


class ExhibitorCreateResponse(BaseModel):
    success: bool = True
    exhibitor: ExhibitorResponse
    credentials: IssuedCredentials | None = None


class ExhibitorUpdateResponse(BaseModel):
    success: bool = True
    exhibitor: ExhibitorResponse


class EventRegistration(BaseModel):
    """Register an existing exhibitor for another event of its organization."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exhibitor_id: int
    event_id: int


class EventRegistrationResponse(BaseModel):
    success: bool = True
    message: str = "Successfully registered for the event!"
    registration: ExhibitorResponse
    event_name: str | None = None
