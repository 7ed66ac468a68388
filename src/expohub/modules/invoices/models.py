"""Invoice database model."""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_STATUS_LENGTH
from expohub.core.database import Base, IntegerIDMixin, TimestampMixin


class Invoice(Base, IntegerIDMixin, TimestampMixin):
    """Billing record for an organization's plan."""

    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"), index=True
    )
    billing_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH))
    billing_address: Mapped[str | None] = mapped_column(Text)
    tax_id: Mapped[str | None] = mapped_column(String(64))
    plan_type: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    currency: Mapped[str] = mapped_column(String(8), default="INR", nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    payment_method: Mapped[str | None] = mapped_column(Text)
    items: Mapped[list[Any]] = mapped_column(JSONB, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    terms_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(MAX_STATUS_LENGTH), default="Pending", nullable=False)
