"""User repository for database operations."""

from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import select

from expohub.api.dependencies import DBSession
from expohub.core.database import ColumnSet, RecordPlan, SchemaInspectorDep
from expohub.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Inserts go through a record plan built against the live ``users``
    columns; lookups use the ORM model.
    """

    def __init__(self, session: DBSession, inspector: SchemaInspectorDep) -> None:
        self.session = session
        self.inspector = inspector

    async def columns(self) -> ColumnSet:
        return await self.inspector.columns(User.__tablename__)

    async def email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def insert(self, plan: RecordPlan) -> dict[str, Any]:
        result = await self.session.execute(plan.insert())
        return dict(result.mappings().one())


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
