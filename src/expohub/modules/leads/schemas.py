"""Pydantic schemas for leads and scanned visitors."""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expohub.core.constants import MAX_EMAIL_LENGTH, MAX_MOBILE_LENGTH


ScanType = Literal["QR_SCAN", "OCR"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# Leads
# ============================================================


class LeadFields(_CamelModel):
    name: str | None = None
    email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    phone: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    company: str | None = None
    designation: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    industry: str | None = None
    notes: str | None = None
    rating: int | None = None
    status: str | None = None
    follow_up_date: date | None = None
    additional_data: dict[str, Any] | None = None


class LeadCreate(LeadFields):
    exhibitor_id: int | None = None
    event_id: int | None = None
    organization_id: int | None = None
    source: str | None = None


class LeadUpdate(LeadFields):
    """Fields left out or sent as null keep their stored value."""

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    exhibitor_id: int | None = None
    event_id: int | None = None
    organization_id: int | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    designation: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    industry: str | None = None
    source: str | None = None
    notes: str | None = None
    rating: int | None = None
    status: str | None = None
    follow_up_date: date | None = None
    additional_data: dict[str, Any] | None = None
    scanned_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LeadListItem(LeadResponse):
    exhibitor_name: str | None = None
    event_name: str | None = None


class LeadEnvelope(BaseModel):
    success: bool = True
    lead: LeadResponse


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


# ============================================================
# Scanned visitors
# ============================================================


class ScanCreate(_CamelModel):
    """A badge or business-card scan. ``scanType`` must be QR_SCAN or OCR."""

    scan_type: ScanType
    exhibitor_id: int | None = None
    event_id: int | None = None
    visitor_id: int | None = None
    visitor_name: str | None = None
    visitor_email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    visitor_phone: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    visitor_company: str | None = None
    visitor_designation: str | None = None
    visitor_unique_code: str | None = None
    ocr_raw_text: str | None = None
    notes: str | None = None
    interest_level: str | None = None


class ScanUpdate(_CamelModel):
    """Fields left out keep their value, except ``followUpDate``, which is always replaced."""

    visitor_name: str | None = None
    visitor_email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    visitor_phone: str | None = Field(default=None, max_length=MAX_MOBILE_LENGTH)
    visitor_company: str | None = None
    visitor_designation: str | None = None
    notes: str | None = None
    lead_status: str | None = None
    interest_level: str | None = None
    follow_up_date: date | None = None

    def changes(self) -> dict[str, Any]:
        values = self.model_dump(exclude_none=True, exclude={"follow_up_date"})
        values["follow_up_date"] = self.follow_up_date
        return values


class ScanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    exhibitor_id: int | None = None
    event_id: int | None = None
    visitor_id: int | None = None
    scan_type: str
    visitor_name: str | None = None
    visitor_email: str | None = None
    visitor_phone: str | None = None
    visitor_company: str | None = None
    visitor_designation: str | None = None
    visitor_unique_code: str | None = None
    ocr_raw_text: str | None = None
    notes: str | None = None
    lead_status: str | None = None
    interest_level: str | None = None
    follow_up_date: date | None = None
    scanned_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ScanListItem(ScanResponse):
    exhibitor_company: str | None = None
    event_name: str | None = None


class ScanEnvelope(BaseModel):
    success: bool = True
    message: str
    scan: ScanResponse


class ScanList(BaseModel):
    success: bool = True
    count: int
    scans: list[ScanListItem]


class ScanStats(BaseModel):
    total_scans: int = 0
    qr_scans: int = 0
    ocr_scans: int = 0
    unique_visitors: int = 0
    today_scans: int = 0


class ScanStatsResponse(BaseModel):
    success: bool = True
    stats: ScanStats
