"""Event database model and write mapping."""

from datetime import date
from typing import Any

from sqlalchemy import Boolean, Date, ForeignKey, String, Text
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
    to_json_object,
    to_list,
)


class Event(Base, IntegerIDMixin, TimestampMixin):
    """An event run by one organization.

    ``name`` is a legacy NOT NULL column that mirrors ``event_name``.
    ``qr_token`` is generated once at creation and never changes.
    """

    __tablename__ = "events"

    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    event_name: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    event_type: Mapped[str | None] = mapped_column(Text)
    event_mode: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(Text)
    organizer_name: Mapped[str | None] = mapped_column(Text)
    contact_person: Mapped[str | None] = mapped_column(Text)
    organizer_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    organizer_mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    venue: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(Text)
    state: Mapped[str | None] = mapped_column(Text)
    country: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[date | None] = mapped_column(Date)
    end_date: Mapped[date | None] = mapped_column(Date)
    registration: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    lead_capture: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    communication: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    qr_token: Mapped[str | None] = mapped_column(String(64), unique=True)
    registration_link: Mapped[str | None] = mapped_column(Text)
    qr_image_path: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="Draft")
    enable_stalls: Mapped[bool | None] = mapped_column(Boolean, default=False)
    stall_config: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    stall_types: Mapped[list[Any] | None] = mapped_column(JSONB, default=list)
    ground_layout_url: Mapped[str | None] = mapped_column(Text)


# ============================================================
# Write mapping
# ============================================================

# ``eventName`` is listed twice: once for the legacy ``name`` column and
# once for ``event_name``. Each entry claims a different column.
EVENT_RECORD = RecordBuilder(
    table_name="events",
    fields=(
        field_spec("organizationId"),
        field_spec("eventName", "name"),
        field_spec("eventName", "event_name"),
        field_spec("description"),
        field_spec("eventType"),
        field_spec("eventMode"),
        field_spec("industry"),
        field_spec("organizerName"),
        field_spec("contactPerson"),
        field_spec("organizerEmail"),
        field_spec("organizerMobile"),
        field_spec("venue"),
        field_spec("city"),
        field_spec("state"),
        field_spec("country"),
        field_spec("startDate", coerce=to_date),
        field_spec("endDate", coerce=to_date),
        field_spec("registration", coerce=to_json_object),
        field_spec("leadCapture", coerce=to_json_object),
        field_spec("communication", coerce=to_json_object),
        field_spec("status", default="Draft"),
        field_spec("enableStalls", coerce=to_flag),
        field_spec("stallConfig", coerce=to_json_object),
        field_spec("stallTypes", coerce=to_list),
        field_spec("groundLayoutUrl"),
    ),
    status_default="Draft",
)
