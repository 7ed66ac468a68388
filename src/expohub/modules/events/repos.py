"""Event repository."""

from datetime import date
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import func, select, update

from expohub.api.dependencies import DBSession
from expohub.core.database import ColumnSet, RecordPlan, SchemaInspectorDep, live_table, resolve_column


TOKEN_VIEW_COLUMNS = (
    "id",
    "event_name",
    "name",
    "start_date",
    "end_date",
    "venue",
    "city",
    "state",
    "qr_image_path",
)
CLOSED_STATUSES = ("Cancelled", "Completed")


class EventRepository:
    """Schema-adaptive access to the events table."""

    table_name = "events"

    def __init__(self, session: DBSession, inspector: SchemaInspectorDep) -> None:
        self.session = session
        self.inspector = inspector

    async def columns(self) -> ColumnSet:
        return await self.inspector.columns(self.table_name)

    async def commit(self) -> None:
        await self.session.commit()

    async def insert(self, plan: RecordPlan) -> dict[str, Any]:
        result = await self.session.execute(plan.insert())
        return dict(result.mappings().one())

    async def list_all(self) -> list[dict[str, Any]]:
        """All events, newest first."""
        live = await self.columns()
        tbl = live_table(self.table_name, live)
        order_column = resolve_column(("created_at", "id"), live) or "id"
        result = await self.session.execute(select(*tbl.c).order_by(tbl.c[order_column].desc()))
        return [dict(row) for row in result.mappings().all()]

    async def get(self, event_id: int) -> dict[str, Any] | None:
        tbl = live_table(self.table_name, await self.columns())
        result = await self.session.execute(select(*tbl.c).where(tbl.c.id == event_id))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def get_by_token(self, token: str) -> dict[str, Any] | None:
        """Public registration view of an event."""
        live = await self.columns()
        tbl = live_table(self.table_name, live)
        selected = [tbl.c[name] for name in TOKEN_VIEW_COLUMNS if name in live]
        result = await self.session.execute(select(*selected).where(tbl.c.qr_token == token))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def set_qr_image_path(self, event_id: int, path: str) -> None:
        tbl = live_table(self.table_name, await self.columns())
        await self.session.execute(
            update(tbl).where(tbl.c.id == event_id).values(qr_image_path=path)
        )

    async def set_ground_layout(self, event_id: int, url: str | None) -> dict[str, Any] | None:
        live = await self.columns()
        tbl = live_table(self.table_name, live)
        values: dict[str, Any] = {"ground_layout_url": url}
        if "updated_at" in live:
            values["updated_at"] = func.now()
        result = await self.session.execute(
            update(tbl).where(tbl.c.id == event_id).values(values).returning(*tbl.c)
        )
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def list_upcoming(self, organization_id: int) -> list[dict[str, Any]]:
        """Events of one organization starting today or later, soonest first.

        Cancelled and Completed events are left out.
        """
        live = await self.columns()
        tbl = live_table(self.table_name, live)
        stmt = (
            select(*tbl.c)
            .where(
                tbl.c.organization_id == organization_id,
                tbl.c.start_date >= date.today(),
            )
            .order_by(tbl.c.start_date.asc())
        )
        if "status" in live:
            stmt = stmt.where(
                tbl.c.status.is_(None) | tbl.c.status.not_in(CLOSED_STATUSES)
            )
        result = await self.session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]


# Type alias for dependency injection
EventRepo = Annotated[EventRepository, Depends(EventRepository)]
