"""Pydantic schemas for invoice operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expohub.core.constants import MAX_EMAIL_LENGTH


class InvoiceCreate(BaseModel):
    """Invoice form. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    organization_id: int | None = None
    billing_email: str | None = Field(default=None, max_length=MAX_EMAIL_LENGTH)
    billing_address: str | None = None
    tax_id: str | None = None
    plan_type: str | None = None
    amount: Decimal | None = Field(default=None, ge=0)
    currency: str | None = None
    due_date: date | None = None
    payment_method: str | None = None
    items: list[Any] | None = None
    notes: str | None = None
    terms_accepted: bool = Field(
        default=False,
        validation_alias=AliasChoices("terms", "termsAccepted", "terms_accepted"),
    )
    status: str | None = None


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    organization_id: int | None = None
    billing_email: str | None = None
    billing_address: str | None = None
    tax_id: str | None = None
    plan_type: str | None = None
    amount: Decimal
    currency: str
    due_date: date | None = None
    payment_method: str | None = None
    items: list[Any]
    notes: str | None = None
    terms_accepted: bool
    status: str
    created_at: datetime
    updated_at: datetime


class InvoiceListItem(InvoiceResponse):
    organization_name: str | None = None
