"""Plan and coupon API routes."""

from fastapi import APIRouter, status

from expohub.modules.plans.schemas import (
    CouponListItem,
    CouponVerify,
    CouponVerifyResponse,
    PlanCreate,
    PlanCreateResponse,
    PlanResponse,
)
from expohub.modules.plans.services import PlanSvc


router = APIRouter(prefix="/plans", tags=["plans"])


@router.post(
    "",
    response_model=PlanCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create plan",
    description="Create a plan. Custom plans are issued a coupon code.",
)
async def create_plan(data: PlanCreate, service: PlanSvc) -> PlanCreateResponse:
    """Create a plan."""
    return await service.create_plan(data)


@router.get(
    "",
    response_model=list[PlanResponse],
    summary="List plans",
)
async def list_plans(service: PlanSvc) -> list[PlanResponse]:
    """List plans, newest first."""
    return await service.list_plans()


@router.get(
    "/coupons",
    response_model=list[CouponListItem],
    summary="List coupons",
)
async def list_coupons(service: PlanSvc) -> list[CouponListItem]:
    """List coupons with their plan, newest first."""
    return await service.list_coupons()


@router.post(
    "/coupons/verify",
    response_model=CouponVerifyResponse,
    summary="Verify coupon",
    description="Check that a coupon code exists and is ACTIVE.",
)
async def verify_coupon(data: CouponVerify, service: PlanSvc) -> CouponVerifyResponse:
    """Verify a coupon code."""
    return await service.verify_coupon(data.code)
