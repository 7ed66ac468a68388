"""Invoice API routes."""

from fastapi import APIRouter, status

from expohub.modules.invoices.schemas import InvoiceCreate, InvoiceListItem, InvoiceResponse
from expohub.modules.invoices.services import InvoiceSvc


router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invoice",
)
async def create_invoice(data: InvoiceCreate, service: InvoiceSvc) -> InvoiceResponse:
    """Create an invoice."""
    return await service.create_invoice(data)


@router.get(
    "",
    response_model=list[InvoiceListItem],
    summary="List invoices",
)
async def list_invoices(service: InvoiceSvc) -> list[InvoiceListItem]:
    """List invoices with the organization name, newest first."""
    return await service.list_invoices()
