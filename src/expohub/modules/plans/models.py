"""Plan and coupon database models."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from expohub.core.constants import MAX_CODE_LENGTH, MAX_STATUS_LENGTH
from expohub.core.database import Base, IntegerIDMixin, TimestampMixin


class Plan(Base, IntegerIDMixin, TimestampMixin):
    """Pricing catalog entry."""

    __tablename__ = "plans"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str | None] = mapped_column(String(100))
    description: Mapped[str | None] = mapped_column(Text)
    validity_days: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str | None] = mapped_column(String(MAX_STATUS_LENGTH))
    limits: Mapped[dict | None] = mapped_column(JSONB, default=dict)
    pricing: Mapped[dict | None] = mapped_column(JSONB, default=dict)

    coupons: Mapped[list["Coupon"]] = relationship(back_populates="plan")


class Coupon(Base, IntegerIDMixin, TimestampMixin):
    """Redeemable code attached to a plan.

    ``used_count`` tracks redemptions; nothing enforces single use.
    """

    __tablename__ = "coupons"

    coupon_code: Mapped[str] = mapped_column(String(MAX_CODE_LENGTH), unique=True, nullable=False)
    plan_id: Mapped[int | None] = mapped_column(
        ForeignKey("plans.id", ondelete="SET NULL"),
        index=True,
    )
    status: Mapped[str] = mapped_column(String(MAX_STATUS_LENGTH), default="ACTIVE", nullable=False)
    used_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    plan: Mapped[Plan | None] = relationship(back_populates="coupons")
