"""Pydantic schemas for user operations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from expohub.core.constants import MAX_MOBILE_LENGTH


class UserCreate(BaseModel):
    """Schema for creating a console user.

    Omitted JSON documents default to ``{}``, ``force_reset`` to True and
    ``login_type`` to ``manual``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: EmailStr
    organization_id: int | None = None
    role: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    mobile: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    department: str | None = None
    permissions: dict[str, Any] | None = None
    additional_permissions: dict[str, Any] | None = None
    login_type: str | None = None
    password: str | None = None
    force_reset: bool | None = None
    security: dict[str, Any] | None = None

    def record_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"password"})


class UserCreateResponse(BaseModel):
    """Result of creating a user (the password hash is never returned)."""

    success: bool = True
    user: dict[str, Any]
