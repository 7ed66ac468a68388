"""Invoice business logic."""

import time
from typing import Annotated

import structlog
from fastapi import Depends

from expohub.modules.invoices.models import Invoice
from expohub.modules.invoices.repos import InvoiceRepo
from expohub.modules.invoices.schemas import InvoiceCreate, InvoiceListItem, InvoiceResponse


logger = structlog.get_logger()


def next_invoice_number() -> str:
    """``INV-`` followed by the current Unix time in milliseconds."""
    return f"INV-{time.time_ns() // 1_000_000}"


class InvoiceService:
    """Service for invoices."""

    def __init__(self, repo: InvoiceRepo) -> None:
        self.repo = repo

    async def create_invoice(self, data: InvoiceCreate) -> InvoiceResponse:
        invoice = await self.repo.create(
            Invoice(
                invoice_number=next_invoice_number(),
                organization_id=data.organization_id,
                billing_email=data.billing_email,
                billing_address=data.billing_address,
                tax_id=data.tax_id,
                plan_type=data.plan_type,
                amount=data.amount or 0,
                currency=data.currency or "INR",
                due_date=data.due_date,
                payment_method=data.payment_method,
                items=data.items or [],
                notes=data.notes,
                terms_accepted=data.terms_accepted,
                status=data.status or "Pending",
            )
        )
        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            organization_id=invoice.organization_id,
        )
        return InvoiceResponse.model_validate(invoice)

    async def list_invoices(self) -> list[InvoiceListItem]:
        return [
            InvoiceListItem(
                **InvoiceResponse.model_validate(invoice).model_dump(),
                organization_name=organization_name,
            )
            for invoice, organization_name in await self.repo.list_with_organization()
        ]


# Type alias for dependency injection
InvoiceSvc = Annotated[InvoiceService, Depends(InvoiceService)]
