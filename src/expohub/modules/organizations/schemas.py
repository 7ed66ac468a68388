"""Pydantic schemas for organization and invite operations."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from expohub.core.auth import IssuedCredentials
from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH, MAX_NAME_LENGTH


# ============================================================
# Organization Schemas
# ============================================================


class OrganizationCreate(BaseModel):
    """Admin-side organization creation.

    Accepts camelCase (``orgName``) or snake_case (``org_name``) keys.
    Flags accept booleans or the strings ``"true"``/``"yes"``; they are
    normalized when the record is built.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    org_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    trade_name: str | None = None
    tenant_type: str | None = None
    industry: str | None = None
    size: str | None = None
    api_access: bool | str | None = None
    business_type: str | None = None
    is_registered: bool | str | None = None
    email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    password: str | None = None
    state: str | None = None
    district: str | None = None
    town: str | None = None
    address: str | None = None
    contact_name: str | None = None
    contact_email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    contact_phone: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    alt_phone: str | None = None
    website: str | None = None
    gst_number: str | None = None
    pan_number: str | None = None
    reg_number: str | None = None
    date_inc: str | None = None
    is_verified: bool | str | None = None
    features: list[Any] | None = None
    plan: str | None = None

    def record_payload(self) -> dict[str, Any]:
        """Logical values for the record builder (camelCase keys, no password)."""
        return self.model_dump(by_alias=True, exclude={"password"})


class OrganizationCreateResponse(BaseModel):
    """Result of creating an organization."""

    success: bool = True
    organization: dict[str, Any]
    credentials: IssuedCredentials | None = None
    email_sent: bool = False
    sms_sent: bool = False


# ============================================================
# Invite Schemas
# ============================================================


class InviteCreate(BaseModel):
    """Invite someone to create an organization by email and/or mobile."""

    email: EmailStr | None = None
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)


class InviteResponse(BaseModel):
    """Schema for invite data in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str | None
    mobile: str | None
    status: str
    expires_at: datetime
    created_at: datetime


class InviteCreateResponse(BaseModel):
    """Result of issuing an invite.

    ``invite_link`` is only echoed back for test identities, whose
    delivery is mocked.
    """

    success: bool = True
    message: str = "Invite sent successfully"
    invite: InviteResponse
    invite_link: str | None = None
    email_sent: bool = False
    sms_sent: bool = False


class InviteValidation(BaseModel):
    """Schema for a valid invite token lookup."""

    valid: bool = True
    email: str | None
    mobile: str | None
    expires_at: datetime


class InviteAccept(BaseModel):
    """Accept an invite by naming the new organization."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        validation_alias=AliasChoices("name", "orgName", "org_name"),
    )


class InviteAcceptResponse(BaseModel):
    """Result of redeeming an invite."""

    success: bool = True
    message: str = "Organization created successfully"
    organization: dict[str, Any]
    credentials: IssuedCredentials | None = None
    email_sent: bool = False
