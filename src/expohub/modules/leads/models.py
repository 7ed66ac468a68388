"""Lead and scan database models."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from expohub.core.constants import MAX_CODE_LENGTH, MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH, MAX_STATUS_LENGTH
from expohub.core.database import Base, IntegerIDMixin, TimestampMixin


SCAN_TYPES = ("QR_SCAN", "OCR")


class Lead(Base, IntegerIDMixin, TimestampMixin):
    """A contact captured by an exhibitor. Repeated captures are kept."""

    __tablename__ = "leads"

    exhibitor_id: Mapped[int | None] = mapped_column(
        ForeignKey("exhibitors.id", ondelete="SET NULL"), index=True
    )
    event_id: Mapped[int | None] = mapped_column(ForeignKey("events.id", ondelete="SET NULL"))
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL")
    )
    name: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    phone: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    company: Mapped[str | None] = mapped_column(Text)
    designation: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(Text)
    state: Mapped[str | None] = mapped_column(Text)
    country: Mapped[str | None] = mapped_column(Text)
    industry: Mapped[str | None] = mapped_column(Text)
    source: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="QR Scan")
    notes: Mapped[str | None] = mapped_column(Text)
    rating: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="New")
    follow_up_date: Mapped[date | None] = mapped_column(Date)
    additional_data: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ScannedVisitor(Base, IntegerIDMixin, TimestampMixin):
    """A visitor badge (QR) or business card (OCR) scanned at a stall."""

    __tablename__ = "exhibitor_scanned_visitors"
    __table_args__ = (
        CheckConstraint("scan_type IN ('QR_SCAN', 'OCR')", name="ck_scanned_visitors_scan_type"),
    )

    exhibitor_id: Mapped[int | None] = mapped_column(
        ForeignKey("exhibitors.id", ondelete="SET NULL"), index=True
    )
    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), index=True
    )
    visitor_id: Mapped[int | None] = mapped_column(ForeignKey("visitors.id", ondelete="SET NULL"))
    scan_type: Mapped[str] = mapped_column(String(20), nullable=False)
    visitor_name: Mapped[str | None] = mapped_column(String(255))
    visitor_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    visitor_phone: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    visitor_company: Mapped[str | None] = mapped_column(String(255))
    visitor_designation: Mapped[str | None] = mapped_column(String(255))
    visitor_unique_code: Mapped[str | None] = mapped_column(String(MAX_CODE_LENGTH))
    ocr_raw_text: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)
    lead_status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH), default="New")
    interest_level: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH))
    follow_up_date: Mapped[date | None] = mapped_column(Date)
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
