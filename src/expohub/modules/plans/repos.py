"""Plan and coupon repositories."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from expohub.api.dependencies import DBSession
from expohub.modules.plans.models import Coupon, Plan


class PlanRepository:
    """Repository for Plan and Coupon database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, plan: Plan) -> Plan:
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def list_plans(self) -> list[Plan]:
        stmt = select(Plan).order_by(Plan.created_at.desc(), Plan.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def try_create_coupon(self, coupon: Coupon) -> Coupon | None:
        """Insert a coupon inside a savepoint.

        Returns:
            The coupon, or None if its code collided with an existing one.
            The collision only rolls back the savepoint, not the plan.
        """
        try:
            async with self.session.begin_nested():
                self.session.add(coupon)
                await self.session.flush()
        except IntegrityError:
            return None
        await self.session.refresh(coupon)
        return coupon

    async def list_coupons(self) -> list[tuple[Coupon, Plan | None]]:
        stmt = (
            select(Coupon, Plan)
            .outerjoin(Plan, Plan.id == Coupon.plan_id)
            .order_by(Coupon.created_at.desc(), Coupon.id.desc())
        )
        result = await self.session.execute(stmt)
        return [(coupon, plan) for coupon, plan in result.all()]

    async def get_active_coupon(self, code: str) -> tuple[Coupon, Plan] | None:
        """Find an ACTIVE coupon together with its plan."""
        stmt = (
            select(Coupon, Plan)
            .join(Plan, Plan.id == Coupon.plan_id)
            .where(Coupon.coupon_code == code, Coupon.status == "ACTIVE")
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1]) if row is not None else None


# Type alias for dependency injection
PlanRepo = Annotated[PlanRepository, Depends(PlanRepository)]
