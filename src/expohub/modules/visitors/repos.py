"""Visitor repository."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from expohub.api.dependencies import DBSession
from expohub.modules.events.models import Event
from expohub.modules.visitors.models import Visitor


class VisitorRepository:
    """Repository for Visitor database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def list_with_event(self) -> list[tuple[Visitor, str | None]]:
        """Visitors newest first, with their event name."""
        stmt = (
            select(Visitor, Event.event_name)
            .outerjoin(Event, Event.id == Visitor.event_id)
            .order_by(Visitor.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def code_exists(self, code: str) -> bool:
        result = await self.session.execute(select(Visitor.id).where(Visitor.unique_code == code))
        return result.first() is not None

    async def create(self, visitor: Visitor) -> Visitor:
        self.session.add(visitor)
        await self.session.flush()
        await self.session.refresh(visitor)
        return visitor

    async def get_by_email(self, email: str) -> Visitor | None:
        stmt = select(Visitor).where(Visitor.email == email).order_by(Visitor.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> tuple[Visitor, str | None, int | None] | None:
        """Visitor with its event name and the event's organization."""
        stmt = (
            select(Visitor, Event.event_name, Event.organization_id)
            .outerjoin(Event, Event.id == Visitor.event_id)
            .where(Visitor.unique_code == code)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1], row[2]) if row is not None else None


# Type alias for dependency injection
VisitorRepo = Annotated[VisitorRepository, Depends(VisitorRepository)]
