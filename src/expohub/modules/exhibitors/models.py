"""Exhibitor database model and update mapping."""

from typing import Any

from sqlalchemy import ForeignKey, Index, String, Text
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


class Exhibitor(Base, IntegerIDMixin, TimestampMixin):
    """One exhibitor registration.

    An exhibitor taking part in several events has one row per event,
    all sharing the same contact details and password hash.
    """

    __tablename__ = "exhibitors"
    __table_args__ = (Index("ix_exhibitors_org_event_email", "organization_id", "event_id", "email"),)

    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )
    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), index=True
    )
    company_name: Mapped[str | None] = mapped_column(Text)
    gst_number: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(Text)
    logo_url: Mapped[str | None] = mapped_column(Text)
    contact_person: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), index=True)
    mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    password_hash: Mapped[str | None] = mapped_column(Text)
    stall_number: Mapped[str | None] = mapped_column(Text)
    stall_category: Mapped[str | None] = mapped_column(Text)
    access_status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="Active")
    lead_capture: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    communication: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)


# ============================================================
# Update mapping
# ============================================================

# Profile edits go through the record builder in partial mode so that
# columns missing on older deployments are skipped instead of failing.
EXHIBITOR_UPDATE = RecordBuilder(
    table_name="exhibitors",
    fields=(
        field_spec("companyName"),
        field_spec("gstNumber"),
        field_spec("address"),
        field_spec("industry"),
        field_spec("logoUrl"),
        field_spec("contactPerson"),
        field_spec("email"),
        field_spec("mobile"),
        field_spec("eventId"),
        field_spec("stallNumber"),
        field_spec("stallCategory"),
        field_spec("accessStatus"),
        field_spec("leadCapture", coerce=to_json_object),
        field_spec("communication", coerce=to_json_object),
    ),
)
