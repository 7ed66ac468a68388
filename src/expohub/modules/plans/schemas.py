"""Pydantic schemas for plans and coupons."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expohub.core.constants import MAX_CODE_LENGTH, MAX_NAME_LENGTH


class PlanCreate(BaseModel):
    """Schema for creating a plan.

    ``validity`` is in days and defaults to 30.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plan_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    plan_type: str | None = None
    description: str | None = None
    validity: int | None = Field(default=None, ge=1)
    status: str | None = None
    limits: dict[str, Any] | None = None
    pricing: dict[str, Any] | None = None


class PlanResponse(BaseModel):
    """Schema for plan data in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str | None
    description: str | None
    validity_days: int | None
    status: str | None
    limits: dict[str, Any] | None
    pricing: dict[str, Any] | None
    created_at: datetime


class CouponResponse(BaseModel):
    """Schema for coupon data in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    coupon_code: str
    plan_id: int | None
    status: str
    used_count: int
    created_at: datetime


class PlanCreateResponse(BaseModel):
    """Result of creating a plan; ``coupon`` is set for Custom plans."""

    success: bool = True
    plan: PlanResponse
    coupon: CouponResponse | None = None


class CouponListItem(BaseModel):
    """Coupon with the name, type and pricing of its plan."""

    id: int
    code: str
    plan_id: int | None
    status: str
    used_count: int
    created_at: datetime
    plan_name: str | None = None
    plan_type: str | None = None
    pricing: dict[str, Any] | None = None


class CouponVerify(BaseModel):
    """Schema for checking a coupon code."""

    code: str = Field(..., min_length=1, max_length=MAX_CODE_LENGTH)


class CouponDetail(CouponResponse):
    """Coupon joined with the plan it unlocks."""

    plan_name: str
    limits: dict[str, Any] | None = None
    pricing: dict[str, Any] | None = None
    description: str | None = None


class CouponVerifyResponse(BaseModel):
    success: bool = True
    coupon: CouponDetail
