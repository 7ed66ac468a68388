"""Admin user database model and write mapping."""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH, MAX_STATUS_LENGTH
from expohub.core.database import (
    Base,
    IntegerIDMixin,
    RecordBuilder,
    TimestampMixin,
    field_spec,
    to_json_object,
)


class User(Base, IntegerIDMixin, TimestampMixin):
    """Console user created by an administrator.

    Attributes:
        organization_id: Owning organization, None for platform staff
        permissions: Role permissions document
        additional_permissions: Per-user grants on top of the role
        force_reset: Require a password change at next sign-in
        security: Sign-in policy document (2FA, IP rules, ...)
    """

    __tablename__ = "users"

    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"),
        index=True,
    )
    role: Mapped[str | None] = mapped_column(String(100))
    first_name: Mapped[str | None] = mapped_column(Text)
    last_name: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=False, index=True)
    mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    department: Mapped[str | None] = mapped_column(Text)
    permissions: Mapped[dict | None] = mapped_column(JSONB, default=dict)
    additional_permissions: Mapped[dict | None] = mapped_column(JSONB, default=dict)
    login_type: Mapped[str | None] = mapped_column(String(50), default="manual")
    password_hash: Mapped[str | None] = mapped_column(Text)
    force_reset: Mapped[bool | None] = mapped_column(Boolean, default=True)
    security: Mapped[dict | None] = mapped_column(JSONB, default=dict)
    status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="active")


USER_RECORD = RecordBuilder(
    table_name="users",
    fields=(
        field_spec("organizationId"),
        field_spec("role"),
        field_spec("firstName"),
        field_spec("lastName"),
        field_spec("email"),
        field_spec("mobile"),
        field_spec("department"),
        field_spec("permissions", coerce=to_json_object),
        field_spec("additionalPermissions", coerce=to_json_object),
        field_spec("loginType", default="manual"),
        field_spec("forceReset", default=True),
        field_spec("security", coerce=to_json_object),
    ),
    status_default="active",
)
