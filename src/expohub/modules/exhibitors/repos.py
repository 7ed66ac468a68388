"""Exhibitor repository."""

from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import or_, select

from expohub.api.dependencies import DBSession
from expohub.core.database import ColumnSet, RecordPlan, SchemaInspectorDep
from expohub.modules.events.models import Event
from expohub.modules.exhibitors.models import Exhibitor
from expohub.modules.organizations.models import Organization


class ExhibitorRepository:
    """Repository for Exhibitor database operations."""

    def __init__(self, session: DBSession, inspector: SchemaInspectorDep) -> None:
        self.session = session
        self.inspector = inspector

    async def columns(self) -> ColumnSet:
        return await self.inspector.columns(Exhibitor.__tablename__)

    async def list_with_context(self) -> list[tuple[Exhibitor, str | None, str | None]]:
        """Exhibitors newest first, with their event and organization names."""
        stmt = (
            select(Exhibitor, Event.event_name, Organization.org_name)
            .outerjoin(Event, Event.id == Exhibitor.event_id)
            .outerjoin(Organization, Organization.id == Exhibitor.organization_id)
            .order_by(Exhibitor.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def get(self, exhibitor_id: int) -> Exhibitor | None:
        return await self.session.get(Exhibitor, exhibitor_id)

    async def create(self, exhibitor: Exhibitor) -> Exhibitor:
        self.session.add(exhibitor)
        await self.session.flush()
        await self.session.refresh(exhibitor)
        return exhibitor

    async def update(self, exhibitor_id: int, plan: RecordPlan) -> dict[str, Any] | None:
        result = await self.session.execute(plan.update(lambda t: t.c.id == exhibitor_id))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def find_for_login(self, email: str) -> tuple[Exhibitor, str | None] | None:
        """First exhibitor row for this email whose access is not revoked."""
        stmt = (
            select(Exhibitor, Event.event_name)
            .outerjoin(Event, Event.id == Exhibitor.event_id)
            .where(
                Exhibitor.email == email,
                or_(Exhibitor.access_status.is_(None), Exhibitor.access_status == "Active"),
            )
            .order_by(Exhibitor.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1]) if row is not None else None

    async def registration_exists(
        self, organization_id: int | None, event_id: int, email: str | None
    ) -> bool:
        stmt = (
            select(Exhibitor.id)
            .where(
                Exhibitor.organization_id == organization_id,
                Exhibitor.event_id == event_id,
                Exhibitor.email == email,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None


# Type alias for dependency injection
ExhibitorRepo = Annotated[ExhibitorRepository, Depends(ExhibitorRepository)]
