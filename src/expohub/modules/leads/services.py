"""Lead capture and scan tracking business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from expohub.core.errors import NotFoundError
from expohub.modules.leads.models import Lead, ScannedVisitor
from expohub.modules.leads.repos import LeadRepo, ScanRepo
from expohub.modules.leads.schemas import (
    DeleteResponse,
    LeadCreate,
    LeadEnvelope,
    LeadListItem,
    LeadResponse,
    LeadUpdate,
    ScanCreate,
    ScanEnvelope,
    ScanList,
    ScanListItem,
    ScanResponse,
    ScanStats,
    ScanStatsResponse,
    ScanUpdate,
)


logger = structlog.get_logger()


class LeadService:
    """Service for exhibitor leads."""

    def __init__(self, repo: LeadRepo) -> None:
        self.repo = repo

    async def list_leads(self, exhibitor_id: int | None = None) -> list[LeadListItem]:
        return [
            LeadListItem(
                **LeadResponse.model_validate(lead).model_dump(),
                exhibitor_name=exhibitor_name,
                event_name=event_name,
            )
            for lead, exhibitor_name, event_name in await self.repo.list_leads(exhibitor_id)
        ]

    async def create_lead(self, data: LeadCreate) -> LeadEnvelope:
        lead = await self.repo.create(
            Lead(
                exhibitor_id=data.exhibitor_id,
                event_id=data.event_id,
                organization_id=data.organization_id,
                name=data.name,
                email=data.email,
                phone=data.phone,
                company=data.company,
                designation=data.designation,
                city=data.city,
                state=data.state,
                country=data.country,
                industry=data.industry,
                source=data.source or "QR Scan",
                notes=data.notes,
                rating=data.rating,
                status=data.status or "New",
                follow_up_date=data.follow_up_date,
                additional_data=data.additional_data or {},
            )
        )
        logger.info("lead_created", lead_id=lead.id, exhibitor_id=lead.exhibitor_id)
        return LeadEnvelope(lead=LeadResponse.model_validate(lead))

    async def update_lead(self, lead_id: int, data: LeadUpdate) -> LeadEnvelope:
        """Update the fields that were sent.

        Raises:
            NotFoundError: If the lead does not exist
        """
        lead = await self.repo.update(lead_id, data.changes())
        if lead is None:
            raise NotFoundError("Lead not found", resource="lead", resource_id=str(lead_id))
        return LeadEnvelope(lead=LeadResponse.model_validate(lead))

    async def delete_lead(self, lead_id: int) -> DeleteResponse:
        if not await self.repo.delete(lead_id):
            raise NotFoundError("Lead not found", resource="lead", resource_id=str(lead_id))
        logger.info("lead_deleted", lead_id=lead_id)
        return DeleteResponse(message="Lead deleted successfully")


class ScanService:
    """Service for badge and business-card scans."""

    def __init__(self, repo: ScanRepo) -> None:
        self.repo = repo

    async def save_scan(self, data: ScanCreate) -> ScanEnvelope:
        scan = await self.repo.create(ScannedVisitor(**data.model_dump()))
        logger.info(
            "visitor_scanned",
            scan_id=scan.id,
            exhibitor_id=scan.exhibitor_id,
            scan_type=scan.scan_type,
        )
        return ScanEnvelope(message="Scan saved successfully", scan=ScanResponse.model_validate(scan))

    async def list_scans(
        self,
        exhibitor_id: int | None = None,
        scan_type: str | None = None,
        event_id: int | None = None,
    ) -> ScanList:
        scans = [
            ScanListItem(
                **ScanResponse.model_validate(scan).model_dump(),
                exhibitor_company=exhibitor_company,
                event_name=event_name,
            )
            for scan, exhibitor_company, event_name in await self.repo.list_scans(
                exhibitor_id, scan_type, event_id
            )
        ]
        return ScanList(count=len(scans), scans=scans)

    async def stats(self, exhibitor_id: int | None = None) -> ScanStatsResponse:
        return ScanStatsResponse(stats=ScanStats(**await self.repo.stats(exhibitor_id)))

    async def update_scan(self, scan_id: int, data: ScanUpdate) -> ScanEnvelope:
        """Update a scan record.

        Raises:
            NotFoundError: If the scan does not exist
        """
        scan = await self.repo.update(scan_id, data.changes())
        if scan is None:
            raise NotFoundError("Scan not found", resource="scan", resource_id=str(scan_id))
        return ScanEnvelope(message="Scan updated successfully", scan=ScanResponse.model_validate(scan))

    async def delete_scan(self, scan_id: int) -> DeleteResponse:
        if not await self.repo.delete(scan_id):
            raise NotFoundError("Scan not found", resource="scan", resource_id=str(scan_id))
        logger.info("scan_deleted", scan_id=scan_id)
        return DeleteResponse(message="Scan deleted successfully")


# Type aliases for dependency injection
LeadSvc = Annotated[LeadService, Depends(LeadService)]
ScanSvc = Annotated[ScanService, Depends(ScanService)]
