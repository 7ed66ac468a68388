"""Plan and coupon business logic."""

import string
from typing import Annotated

import structlog
from fastapi import Depends

from expohub.core.constants import COUPON_MAX_ATTEMPTS, COUPON_SUFFIX_LENGTH
from expohub.core.errors import NotFoundError
from expohub.core.utils.text import code_prefix, random_code
from expohub.modules.plans.models import Coupon, Plan
from expohub.modules.plans.repos import PlanRepo
from expohub.modules.plans.schemas import (
    CouponDetail,
    CouponListItem,
    CouponResponse,
    CouponVerifyResponse,
    PlanCreate,
    PlanCreateResponse,
    PlanResponse,
)


logger = structlog.get_logger()

DEFAULT_VALIDITY_DAYS = 30
CUSTOM_PLAN_TYPE = "Custom"
COUPON_ALPHABET = string.digits + string.ascii_uppercase


def generate_coupon_code(plan_type: str | None) -> str:
    """``CUSTOM-7KQ2ZD``: plan-type prefix plus a random base-36 suffix."""
    prefix = code_prefix(plan_type, "CUSTOM")
    return f"{prefix}-{random_code(COUPON_ALPHABET, COUPON_SUFFIX_LENGTH)}"


class PlanService:
    """Service for the plan catalog and coupons."""

    def __init__(self, repo: PlanRepo) -> None:
        self.repo = repo

    async def create_plan(self, data: PlanCreate) -> PlanCreateResponse:
        """Create a plan; Custom plans also get a coupon.

        A coupon code collision is retried with a fresh code up to
        ``COUPON_MAX_ATTEMPTS`` times. If every attempt collides the plan
        is still created, without a coupon.
        """
        plan = await self.repo.create(
            Plan(
                name=data.plan_name,
                type=data.plan_type or CUSTOM_PLAN_TYPE,
                description=data.description or "",
                validity_days=data.validity or DEFAULT_VALIDITY_DAYS,
                status=data.status or "Active",
                limits=data.limits or {},
                pricing=data.pricing or {},
            )
        )
        logger.info("plan_created", plan_id=plan.id, plan_type=plan.type)

        coupon: Coupon | None = None
        if plan.type == CUSTOM_PLAN_TYPE:
            for attempt in range(1, COUPON_MAX_ATTEMPTS + 1):
                coupon = await self.repo.try_create_coupon(
                    Coupon(coupon_code=generate_coupon_code(plan.type), plan_id=plan.id)
                )
                if coupon is not None:
                    logger.info("coupon_created", plan_id=plan.id, attempt=attempt)
                    break
                logger.warning("coupon_code_collision", plan_id=plan.id, attempt=attempt)
            else:
                logger.error("coupon_generation_exhausted", plan_id=plan.id)

        return PlanCreateResponse(
            plan=PlanResponse.model_validate(plan),
            coupon=CouponResponse.model_validate(coupon) if coupon else None,
        )

    async def list_plans(self) -> list[PlanResponse]:
        return [PlanResponse.model_validate(p) for p in await self.repo.list_plans()]

    async def list_coupons(self) -> list[CouponListItem]:
        return [
            CouponListItem(
                id=coupon.id,
                code=coupon.coupon_code,
                plan_id=coupon.plan_id,
                status=coupon.status,
                used_count=coupon.used_count,
                created_at=coupon.created_at,
                plan_name=plan.name if plan else None,
                plan_type=plan.type if plan else None,
                pricing=plan.pricing if plan else None,
            )
            for coupon, plan in await self.repo.list_coupons()
        ]

    async def verify_coupon(self, code: str) -> CouponVerifyResponse:
        """Look up an ACTIVE coupon.

        Raises:
            NotFoundError: If the code is unknown or not ACTIVE
        """
        found = await self.repo.get_active_coupon(code.strip())
        if found is None:
            raise NotFoundError("Invalid or inactive coupon code", resource="coupon")

        coupon, plan = found
        detail = CouponDetail(
            **CouponResponse.model_validate(coupon).model_dump(),
            plan_name=plan.name,
            limits=plan.limits,
            pricing=plan.pricing,
            description=plan.description,
        )
        return CouponVerifyResponse(coupon=detail)


# Type alias for dependency injection
PlanSvc = Annotated[PlanService, Depends(PlanService)]
