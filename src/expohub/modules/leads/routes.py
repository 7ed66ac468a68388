"""Lead and scanned-visitor API routes."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from expohub.modules.leads.schemas import (
    DeleteResponse,
    LeadCreate,
    LeadEnvelope,
    LeadListItem,
    LeadUpdate,
    ScanCreate,
    ScanEnvelope,
    ScanList,
    ScanStatsResponse,
    ScanType,
    ScanUpdate,
)
from expohub.modules.leads.services import LeadSvc, ScanSvc


ExhibitorFilter = Annotated[int | None, Query(alias="exhibitorId")]

leads_router = APIRouter(prefix="/leads", tags=["leads"])
scans_router = APIRouter(prefix="/scanned-visitors", tags=["scanned-visitors"])


# ============================================================
# Leads
# ============================================================


@leads_router.get(
    "",
    response_model=list[LeadListItem],
    summary="List leads",
)
async def list_leads(service: LeadSvc, exhibitor_id: ExhibitorFilter = None) -> list[LeadListItem]:
    """List leads, latest scan first, optionally for one exhibitor."""
    return await service.list_leads(exhibitor_id)


@leads_router.post(
    "",
    response_model=LeadEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create lead",
)
async def create_lead(data: LeadCreate, service: LeadSvc) -> LeadEnvelope:
    """Record a lead from a scan or manual entry."""
    return await service.create_lead(data)


@leads_router.put(
    "/{lead_id}",
    response_model=LeadEnvelope,
    summary="Update lead",
    description="Only fields that are sent (and not null) are changed.",
)
async def update_lead(lead_id: int, data: LeadUpdate, service: LeadSvc) -> LeadEnvelope:
    """Update a lead."""
    return await service.update_lead(lead_id, data)


@leads_router.delete(
    "/{lead_id}",
    response_model=DeleteResponse,
    summary="Delete lead",
)
async def delete_lead(lead_id: int, service: LeadSvc) -> DeleteResponse:
    """Delete a lead."""
    return await service.delete_lead(lead_id)


# ============================================================
# Scanned visitors
# ============================================================


@scans_router.post(
    "",
    response_model=ScanEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Save scan",
)
async def save_scan(data: ScanCreate, service: ScanSvc) -> ScanEnvelope:
    """Save a QR or OCR scan."""
    return await service.save_scan(data)


@scans_router.get(
    "",
    response_model=ScanList,
    summary="List scans",
)
async def list_scans(
    service: ScanSvc,
    exhibitor_id: ExhibitorFilter = None,
    scan_type: Annotated[ScanType | None, Query(alias="scanType")] = None,
    event_id: Annotated[int | None, Query(alias="eventId")] = None,
) -> ScanList:
    """List scans, latest first."""
    return await service.list_scans(exhibitor_id, scan_type, event_id)


@scans_router.get(
    "/stats",
    response_model=ScanStatsResponse,
    summary="Scan statistics",
)
async def scan_stats(service: ScanSvc, exhibitor_id: ExhibitorFilter = None) -> ScanStatsResponse:
    """Scan counters, overall or for one exhibitor."""
    return await service.stats(exhibitor_id)


@scans_router.put(
    "/{scan_id}",
    response_model=ScanEnvelope,
    summary="Update scan",
)
async def update_scan(scan_id: int, data: ScanUpdate, service: ScanSvc) -> ScanEnvelope:
    """Update a scan's contact details and follow-up."""
    return await service.update_scan(scan_id, data)


@scans_router.delete(
    "/{scan_id}",
    response_model=DeleteResponse,
    summary="Delete scan",
)
async def delete_scan(scan_id: int, service: ScanSvc) -> DeleteResponse:
    """Delete a scan."""
    return await service.delete_scan(scan_id)


router = APIRouter()
router.include_router(leads_router)
router.include_router(scans_router)
