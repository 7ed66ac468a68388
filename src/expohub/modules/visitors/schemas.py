"""Pydantic schemas for visitor operations."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expohub.core.auth import IssuedCredentials
from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH


class VisitorCreate(BaseModel):
    """Visitor registration form. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    gender: str | None = None
    age_group: str | None = Field(
        default=None,
        validation_alias=AliasChoices("age", "ageGroup", "age_group"),
    )
    organization: str | None = None
    designation: str | None = None
    password: str | None = None
    visitor_category: str | None = None
    valid_dates: Any = None
    communication: dict[str, Any] | None = None


class VisitorResponse(BaseModel):
    """Visitor data in responses; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    mobile: str | None = None
    gender: str | None = None
    age_group: str | None = None
    organization: str | None = None
    designation: str | None = None
    unique_code: str | None = None
    visitor_category: str | None = None
    valid_dates: Any = None
    communication: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VisitorListItem(VisitorResponse):
    event_name: str | None = None


class VisitorCreateResponse(BaseModel):
    success: bool = True
    visitor: VisitorResponse
    unique_code: str
    credentials: IssuedCredentials | None = None
    email_sent: bool = False
    sms_sent: bool = False


class CheckInVisitor(VisitorResponse):
    """Visitor resolved from a scanned check-in code."""

    event_name: str | None = None
    organization_id: int | None = None


class VisitorLookupResponse(BaseModel):
    success: bool = True
    visitor: CheckInVisitor
