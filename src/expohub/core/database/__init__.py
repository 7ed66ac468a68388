"""Database layer - sessions, base models, schema introspection and adaptive writes."""

from expohub.core.database.base import Base, IntegerIDMixin, TimestampMixin
from expohub.core.database.introspection import (
    ColumnSet,
    SchemaInspector,
    SchemaInspectorDep,
)
from expohub.core.database.records import (
    ColumnAssignment,
    FieldSpec,
    RecordBuilder,
    RecordPlan,
    field_spec,
    live_table,
    resolve_column,
    to_date,
    to_flag,
    to_json_object,
    to_list,
)
from expohub.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "ColumnAssignment",
    "ColumnSet",
    "FieldSpec",
    "IntegerIDMixin",
    "RecordBuilder",
    "RecordPlan",
    "SchemaInspector",
    "SchemaInspectorDep",
    "TimestampMixin",
    "async_engine",
    "async_session_factory",
    "field_spec",
    "get_db",
    "live_table",
    "resolve_column",
    "to_date",
    "to_flag",
    "to_json_object",
    "to_list",
]
