"""Visitor database model."""

from typing import Any

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from expohub.core.constants import MAX_CODE_LENGTH, MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH
from expohub.core.database import Base, IntegerIDMixin, TimestampMixin


class Visitor(Base, IntegerIDMixin, TimestampMixin):
    """A registered event visitor.

    ``unique_code`` is the printed check-in code (``VIS-XXXXXXXX``) that
    exhibitors scan at their stalls.
    """

    __tablename__ = "visitors"

    event_id: Mapped[int | None] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), index=True
    )
    first_name: Mapped[str | None] = mapped_column(Text)
    last_name: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), index=True)
    mobile: Mapped[str | None] = mapped_column(String(MAX_MOBILE_LENGTH))
    gender: Mapped[str | None] = mapped_column(String(32))
    age_group: Mapped[str | None] = mapped_column(String(32))
    organization: Mapped[str | None] = mapped_column(Text)
    designation: Mapped[str | None] = mapped_column(Text)
    password_hash: Mapped[str | None] = mapped_column(Text)
    unique_code: Mapped[str | None] = mapped_column(String(MAX_CODE_LENGTH), unique=True)
    visitor_category: Mapped[str | None] = mapped_column(Text)
    valid_dates: Mapped[Any | None] = mapped_column(JSONB)
    communication: Mapped[dict[str, Any] | None] = mapped_column(JSONB, default=dict)
