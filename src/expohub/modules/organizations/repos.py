"""Organization and invite repositories."""

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import delete, or_, select

from expohub.api.dependencies import DBSession
from expohub.core.database import (
    ColumnSet,
    RecordPlan,
    SchemaInspectorDep,
    live_table,
    resolve_column,
)
from expohub.core.errors import ConfigurationError
from expohub.modules.organizations.models import (
    EMAIL_COLUMNS,
    NAME_COLUMNS,
    PASSWORD_COLUMNS,
    OrganizationInvite,
)


HIDDEN_COLUMNS = frozenset({"password_hash", "password"})


class OrganizationRepository:
    """Schema-adaptive access to the organizations table.

    Every statement is built against the live column set so the same code
    runs on deployments with and without the legacy columns.
    """

    table_name = "organizations"

    def __init__(self, session: DBSession, inspector: SchemaInspectorDep) -> None:
        self.session = session
        self.inspector = inspector

    async def columns(self) -> ColumnSet:
        return await self.inspector.columns(self.table_name)

    async def commit(self) -> None:
        await self.session.commit()

    async def insert(self, plan: RecordPlan) -> dict[str, Any]:
        """Execute an insert plan and return the new row."""
        result = await self.session.execute(plan.insert())
        return dict(result.mappings().one())

    async def list_public(self) -> list[dict[str, Any]]:
        """List organizations newest first, without credential columns."""
        live = await self.columns()
        visible = {name: type_ for name, type_ in live.items() if name not in HIDDEN_COLUMNS}
        if not visible:
            return []

        tbl = live_table(self.table_name, visible)
        order_column = resolve_column(("created_at", "id"), visible) or next(iter(visible))
        stmt = select(*tbl.c).order_by(tbl.c[order_column].desc())
        result = await self.session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def exists(self, organization_id: int) -> bool:
        tbl = live_table(self.table_name, await self.columns())
        result = await self.session.execute(select(tbl.c.id).where(tbl.c.id == organization_id))
        return result.first() is not None

    async def email_exists(self, email: str, live: ColumnSet | None = None) -> bool:
        """Check whether an organization already uses this primary email."""
        live = live if live is not None else await self.columns()
        email_column = resolve_column(EMAIL_COLUMNS, live)
        if email_column is None:
            return False

        tbl = live_table(self.table_name, live)
        stmt = select(tbl.c[email_column]).where(tbl.c[email_column] == email).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_for_login(self, email: str) -> dict[str, Any] | None:
        """Load the sign-in view of an Active organization by primary email.

        Returns:
            Mapping with ``id``, ``org_name``, ``primary_email``,
            ``contact_email`` and ``password_hash``, or None

        Raises:
            ConfigurationError: If the table lacks a name, email or password column
        """
        live = await self.columns()
        name_column = resolve_column(NAME_COLUMNS, live)
        email_column = resolve_column(EMAIL_COLUMNS, live)
        password_column = resolve_column(PASSWORD_COLUMNS, live)

        for label, found in (
            ("primary email", email_column),
            ("password hash", password_column),
            ("organization name", name_column),
        ):
            if found is None:
                raise ConfigurationError(
                    f"Organizations table has no {label} column configured",
                    details={"table": self.table_name},
                )

        tbl = live_table(self.table_name, live)
        selected = [
            tbl.c.id,
            tbl.c[name_column].label("org_name"),
            tbl.c[email_column].label("primary_email"),
            tbl.c[password_column].label("password_hash"),
        ]
        if "contact_email" in live:
            selected.append(tbl.c.contact_email)

        stmt = select(*selected).where(tbl.c[email_column] == email)
        if "status" in live:
            stmt = stmt.where(tbl.c.status == "Active")

        result = await self.session.execute(stmt.limit(1))
        row = result.mappings().first()
        return dict(row) if row is not None else None


class InviteRepository:
    """Repository for OrganizationInvite database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def create(self, invite: OrganizationInvite) -> OrganizationInvite:
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def find_active(self, email: str | None, mobile: str | None) -> OrganizationInvite | None:
        """Find a PENDING, unexpired invite for this email or mobile."""
        matchers = []
        if email:
            matchers.append(OrganizationInvite.email == email)
        if mobile:
            matchers.append(OrganizationInvite.mobile == mobile)
        if not matchers:
            return None

        stmt = (
            select(OrganizationInvite)
            .where(
                or_(*matchers),
                OrganizationInvite.status == "PENDING",
                OrganizationInvite.expires_at > datetime.now(UTC),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_pending(self, email: str | None, mobile: str | None) -> int:
        """Delete PENDING invites for this email or mobile, expired or not.

        Returns:
            Number of invites deleted
        """
        matchers = []
        if email:
            matchers.append(OrganizationInvite.email == email)
        if mobile:
            matchers.append(OrganizationInvite.mobile == mobile)
        if not matchers:
            return 0

        stmt = delete(OrganizationInvite).where(
            or_(*matchers),
            OrganizationInvite.status == "PENDING",
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def get_pending(self, token: str, *, lock: bool = False) -> OrganizationInvite | None:
        """Load a PENDING, unexpired invite by token.

        Args:
            token: Invite token
            lock: Take a row lock (``FOR UPDATE``) until the transaction ends.
                A concurrent locker waits, then re-checks the predicate and
                no longer sees the invite once it has been accepted.
        """
        stmt = select(OrganizationInvite).where(
            OrganizationInvite.invite_token == token,
            OrganizationInvite.status == "PENDING",
            OrganizationInvite.expires_at > datetime.now(UTC),
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_accepted(self, invite: OrganizationInvite) -> OrganizationInvite:
        invite.status = "ACCEPTED"
        await self.session.flush()
        return invite


# Type aliases for dependency injection
OrganizationRepo = Annotated[OrganizationRepository, Depends(OrganizationRepository)]
InviteRepo = Annotated[InviteRepository, Depends(InviteRepository)]
