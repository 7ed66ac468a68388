"""Invoice repository."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from expohub.api.dependencies import DBSession
from expohub.modules.invoices.models import Invoice
from expohub.modules.organizations.models import Organization


class InvoiceRepository:
    """Repository for Invoice database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def list_with_organization(self) -> list[tuple[Invoice, str | None]]:
        stmt = (
            select(Invoice, Organization.org_name)
            .outerjoin(Organization, Organization.id == Invoice.organization_id)
            .order_by(Invoice.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


# Type alias for dependency injection
InvoiceRepo = Annotated[InvoiceRepository, Depends(InvoiceRepository)]
