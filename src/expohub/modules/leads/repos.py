"""Lead and scan repositories."""

from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import delete, distinct, func, select, update

from expohub.api.dependencies import DBSession
from expohub.modules.events.models import Event
from expohub.modules.exhibitors.models import Exhibitor
from expohub.modules.leads.models import Lead, ScannedVisitor


class LeadRepository:
    """Repository for Lead database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_leads(self, exhibitor_id: int | None = None) -> list[tuple[Lead, str | None, str | None]]:
        """Leads with exhibitor company and event name, latest scan first."""
        stmt = (
            select(Lead, Exhibitor.company_name, Event.event_name)
            .outerjoin(Exhibitor, Exhibitor.id == Lead.exhibitor_id)
            .outerjoin(Event, Event.id == Lead.event_id)
            .order_by(Lead.scanned_at.desc())
        )
        if exhibitor_id is not None:
            stmt = stmt.where(Lead.exhibitor_id == exhibitor_id)
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def create(self, lead: Lead) -> Lead:
        self.session.add(lead)
        await self.session.flush()
        await self.session.refresh(lead)
        return lead

    async def update(self, lead_id: int, changes: dict[str, Any]) -> Lead | None:
        """Write ``changes`` and stamp ``updated_at``; untouched columns keep their value."""
        stmt = (
            update(Lead)
            .where(Lead.id == lead_id)
            .values(**changes, updated_at=func.now())
            .returning(Lead)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, lead_id: int) -> bool:
        result = await self.session.execute(delete(Lead).where(Lead.id == lead_id).returning(Lead.id))
        return result.first() is not None


class ScanRepository:
    """Repository for ScannedVisitor database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, scan: ScannedVisitor) -> ScannedVisitor:
        self.session.add(scan)
        await self.session.flush()
        await self.session.refresh(scan)
        return scan

    async def list_scans(
        self,
        exhibitor_id: int | None = None,
        scan_type: str | None = None,
        event_id: int | None = None,
    ) -> list[tuple[ScannedVisitor, str | None, str | None]]:
        stmt = (
            select(ScannedVisitor, Exhibitor.company_name, Event.event_name)
            .outerjoin(Exhibitor, Exhibitor.id == ScannedVisitor.exhibitor_id)
            .outerjoin(Event, Event.id == ScannedVisitor.event_id)
            .order_by(ScannedVisitor.scanned_at.desc())
        )
        if exhibitor_id is not None:
            stmt = stmt.where(ScannedVisitor.exhibitor_id == exhibitor_id)
        if scan_type is not None:
            stmt = stmt.where(ScannedVisitor.scan_type == scan_type)
        if event_id is not None:
            stmt = stmt.where(ScannedVisitor.event_id == event_id)
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def stats(self, exhibitor_id: int | None = None) -> dict[str, int]:
        """Scan counters, across all exhibitors or for one."""
        count = func.count(ScannedVisitor.id)
        stmt = select(
            count.label("total_scans"),
            count.filter(ScannedVisitor.scan_type == "QR_SCAN").label("qr_scans"),
            count.filter(ScannedVisitor.scan_type == "OCR").label("ocr_scans"),
            func.count(distinct(ScannedVisitor.visitor_email)).label("unique_visitors"),
            count.filter(func.date(ScannedVisitor.scanned_at) == func.current_date()).label("today_scans"),
        )
        if exhibitor_id is not None:
            stmt = stmt.where(ScannedVisitor.exhibitor_id == exhibitor_id)
        result = await self.session.execute(stmt)
        return dict(result.mappings().one())

    async def update(self, scan_id: int, changes: dict[str, Any]) -> ScannedVisitor | None:
        stmt = (
            update(ScannedVisitor)
            .where(ScannedVisitor.id == scan_id)
            .values(**changes, updated_at=func.now())
            .returning(ScannedVisitor)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, scan_id: int) -> bool:
        result = await self.session.execute(
            delete(ScannedVisitor).where(ScannedVisitor.id == scan_id).returning(ScannedVisitor.id)
        )
        return result.first() is not None


# Type aliases for dependency injection
LeadRepo = Annotated[LeadRepository, Depends(LeadRepository)]
ScanRepo = Annotated[ScanRepository, Depends(ScanRepository)]
