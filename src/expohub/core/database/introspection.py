"""Live schema introspection.

Deployments do not always run every migration, so writes against
drifting tables first ask the database which columns actually exist.
"""

from typing import Annotated, Any

import structlog
from fastapi import Depends
from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.types import TypeEngine

from expohub.core.database.session import get_db


logger = structlog.get_logger()

# Ordered column name -> SQL type, as reported by the live database
ColumnSet = dict[str, TypeEngine[Any]]


def _read_columns(sync_conn: Connection, table_name: str) -> ColumnSet:
    inspector = inspect(sync_conn)
    if not inspector.has_table(table_name):
        return {}
    return {col["name"]: col["type"] for col in inspector.get_columns(table_name)}


class SchemaInspector:
    """Reads table definitions through the request's own connection.

    Introspection runs inside the caller's transaction, so a column added
    earlier in the same transaction is visible. A missing table yields an
    empty column set; callers must treat that as a configuration problem
    rather than silently writing nothing.
    """

    def __init__(self, session: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.session = session

    async def columns(self, table_name: str) -> ColumnSet:
        """Return the table's columns in ordinal order.

        Args:
            table_name: Unqualified table name

        Returns:
            Mapping of column name to reflected SQL type, empty if the
            table does not exist
        """
        conn = await self.session.connection()
        columns = await conn.run_sync(_read_columns, table_name)
        logger.debug("schema_columns_loaded", table=table_name, column_count=len(columns))
        return columns


SchemaInspectorDep = Annotated[SchemaInspector, Depends(SchemaInspector)]
