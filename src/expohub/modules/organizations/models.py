"""Organization database models and write mappings."""

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH, MAX_STATUS_LENGTH
from expohub.core.database import (
    Base,
    IntegerIDMixin,
    RecordBuilder,
    TimestampMixin,
    field_spec,
    to_date,
    to_flag,
    to_list,
)


class Organization(Base, IntegerIDMixin, TimestampMixin):
    """Tenant root.

    Older deployments may still carry ``name``, ``email`` and ``phone``
    instead of (or next to) ``org_name``, ``primary_email`` and
    ``primary_mobile``. Writes therefore go through
    :data:`ORGANIZATION_RECORD`, never through this model.
    """

    __tablename__ = "organizations"

    org_name: Mapped[str | None] = mapped_column(Text)
    trade_name: Mapped[str | None] = mapped_column(Text)
    tenant_type: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(Text)
    size: Mapped[str | None] = mapped_column(Text)
    api_access: Mapped[bool | None] = mapped_column(Boolean, default=False)
    business_type: Mapped[str | None] = mapped_column(Text)
    is_registered: Mapped[bool | None] = mapped_column(Boolean, default=False)
    primary_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), index=True)
    primary_mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    state: Mapped[str | None] = mapped_column(Text)
    district: Mapped[str | None] = mapped_column(Text)
    town: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(Text)
    contact_name: Mapped[str | None] = mapped_column(Text)
    contact_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    contact_phone: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    alt_phone: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    website: Mapped[str | None] = mapped_column(Text)
    gst_number: Mapped[str | None] = mapped_column(String(32))
    pan_number: Mapped[str | None] = mapped_column(String(16))
    reg_number: Mapped[str | None] = mapped_column(Text)
    date_inc: Mapped[date | None] = mapped_column(Date)
    is_verified: Mapped[bool | None] = mapped_column(Boolean, default=False)
    features: Mapped[list | None] = mapped_column(JSONB, default=list)
    plan: Mapped[str | None] = mapped_column(Text)
    password_hash: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="Active")


class OrganizationInvite(Base, IntegerIDMixin, TimestampMixin):
    """Outstanding invitation to create an organization.

    PENDING until redeemed once, then ACCEPTED. Redemption locks the row
    (``SELECT ... FOR UPDATE``) so two concurrent accepts cannot both
    create an organization.
    """

    __tablename__ = "organization_invites"

    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), index=True)
    mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH), index=True)
    invite_token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(MAX_STATUS_LENGTH), default="PENDING", nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ============================================================
# Write mapping
# ============================================================

# Candidate order is a compatibility contract: current columns first,
# legacy aliases last. ``email``/``contactEmail`` and
# ``mobile``/``contactPhone`` may both fall back to the same legacy column;
# the earlier key keeps it.
ORGANIZATION_RECORD = RecordBuilder(
    table_name="organizations",
    fields=(
        field_spec("orgName", "org_name", "name"),
        field_spec("tradeName"),
        field_spec("tenantType"),
        field_spec("industry"),
        field_spec("size"),
        field_spec("apiAccess", coerce=to_flag),
        field_spec("businessType"),
        field_spec("isRegistered", coerce=to_flag),
        field_spec("email", "primary_email", "email"),
        field_spec("mobile", "primary_mobile", "phone"),
        field_spec("state"),
        field_spec("district"),
        field_spec("town"),
        field_spec("address"),
        field_spec("contactName"),
        field_spec("contactEmail", "contact_email", "email"),
        field_spec("contactPhone", "contact_phone", "phone"),
        field_spec("altPhone"),
        field_spec("website"),
        field_spec("gstNumber"),
        field_spec("panNumber"),
        field_spec("regNumber"),
        field_spec("dateInc", coerce=to_date),
        field_spec("isVerified", coerce=to_flag),
        field_spec("features", coerce=to_list),
        field_spec("plan"),
    ),
    status_default="Active",
)

# Column candidates used to read organizations back on drifting schemas
NAME_COLUMNS = ("org_name", "name")
EMAIL_COLUMNS = ("primary_email", "email")
PASSWORD_COLUMNS = ("password_hash", "password")
