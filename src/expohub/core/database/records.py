"""Schema-adaptive record builder.

Several tables differ between deployments: some still carry legacy columns
(``name`` next to ``org_name``, ``email`` next to ``primary_email``), some
lack columns added by later migrations. Instead of hardcoding a column list
per table, each write is described by a table of :class:`FieldSpec`
descriptors. Each one maps a logical payload key to candidate physical
columns in priority order. The descriptors are evaluated against the live
column set from :class:`~expohub.core.database.introspection.SchemaInspector`.

Column resolution rules:

- A logical key binds to the first candidate column that exists in the
  live schema and has not been taken by an earlier key. ``email`` and
  ``contactEmail`` can both fall back to a legacy ``email`` column without
  producing a duplicate assignment.
- Candidate order is a compatibility contract. When a legacy and a current
  column both exist, the first-listed one wins.
- ``status``, ``created_at`` and ``updated_at`` are appended when present
  and not already assigned. Timestamps use ``now()`` on the server.

The result is a :class:`RecordPlan` that renders to an ordinary SQLAlchemy
``INSERT``/``UPDATE`` with bound parameters.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy import ColumnElement, Insert, Update, column, func, table
from sqlalchemy.sql.expression import TableClause

from expohub.core.database.introspection import ColumnSet
from expohub.core.errors import ConfigurationError
from expohub.core.utils.text import to_snake_case


Coercion = Callable[[Any], Any]

SERVER_TIMESTAMP_COLUMNS = ("created_at", "updated_at")


# ============================================================
# Coercions
# ============================================================


def passthrough(value: Any) -> Any:
    return value


def to_flag(value: Any) -> bool:
    """Accept ``True``, ``"true"`` and ``"yes"`` as set; anything else is unset."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes")
    return False


def to_list(value: Any) -> Any:
    """Default missing arrays to an empty list."""
    if value is None or value == "":
        return []
    return value


def to_json_object(value: Any) -> Any:
    """Default missing JSON documents to an empty object."""
    if value is None:
        return {}
    return value


def to_date(value: Any) -> date | None:
    """Parse ISO dates; unparseable input becomes NULL rather than an error."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


# ============================================================
# Field descriptors
# ============================================================


@dataclass(frozen=True)
class FieldSpec:
    """Describe how one logical payload key maps onto storage.

    Attributes:
        key: Logical (camelCase) payload key; its snake_case form is also accepted
        columns: Candidate physical columns in priority order
        coerce: Conversion applied to the raw payload value
        default: Used when the payload carries no value for the key
        aliases: Extra payload keys to look up, in order, after ``key``
    """

    key: str
    columns: tuple[str, ...]
    coerce: Coercion = passthrough
    default: Any = None
    aliases: tuple[str, ...] = ()

    def lookup_keys(self) -> tuple[str, ...]:
        snake = to_snake_case(self.key)
        keys = (self.key,) if snake == self.key else (self.key, snake)
        return keys + self.aliases

    def is_present(self, payload: Mapping[str, Any]) -> bool:
        return any(k in payload for k in self.lookup_keys())

    def value_from(self, payload: Mapping[str, Any]) -> Any:
        raw = None
        for k in self.lookup_keys():
            if payload.get(k) is not None:
                raw = payload[k]
                break
        if raw is None:
            raw = self.default
        return self.coerce(raw)


def field_spec(key: str, *columns: str, **kwargs: Any) -> FieldSpec:
    """Shorthand: ``field_spec("orgName", "org_name", "name")``.

    With no columns given, the snake_case form of ``key`` is the only candidate.
    """
    return FieldSpec(key=key, columns=columns or (to_snake_case(key),), **kwargs)


def resolve_column(candidates: Iterable[str], live_columns: Iterable[str]) -> str | None:
    """Return the first candidate present in the live schema."""
    live = set(live_columns)
    return next((c for c in candidates if c in live), None)


def live_table(table_name: str, live_columns: ColumnSet) -> TableClause:
    """Lightweight table construct typed from the live schema."""
    return table(
        table_name,
        *(column(name, type_) for name, type_ in live_columns.items()),
    )


# ============================================================
# Plans
# ============================================================


@dataclass(frozen=True)
class ColumnAssignment:
    """One resolved column with its bound value or a server-side ``now()``."""

    column: str
    value: Any = None
    server_now: bool = False
    source_key: str | None = None

    @property
    def placeholder(self) -> str:
        return "NOW()" if self.server_now else f":{self.column}"

    def expression(self) -> Any:
        return func.now() if self.server_now else self.value


@dataclass(frozen=True)
class RecordPlan:
    """An ordered, duplicate-free set of column assignments for one table."""

    table_name: str
    live_columns: ColumnSet
    assignments: tuple[ColumnAssignment, ...]

    @property
    def columns(self) -> list[str]:
        return [a.column for a in self.assignments]

    @property
    def values(self) -> dict[str, Any]:
        """Bound values keyed by column; server-side expressions are excluded."""
        return {a.column: a.value for a in self.assignments if not a.server_now}

    def as_triples(self) -> list[tuple[str, str, Any]]:
        """Return ``(column, placeholder, value)`` in statement order."""
        return [(a.column, a.placeholder, None if a.server_now else a.value) for a in self.assignments]

    def table(self) -> TableClause:
        return live_table(self.table_name, self.live_columns)

    def insert(self) -> Insert:
        """Render ``INSERT ... RETURNING *``."""
        tbl = self.table()
        return (
            tbl.insert()
            .values({a.column: a.expression() for a in self.assignments})
            .returning(*tbl.c)
        )

    def update(self, *where: Callable[[TableClause], ColumnElement[bool]]) -> Update:
        """Render ``UPDATE ... WHERE ... RETURNING *``.

        Each ``where`` callable receives the table construct, e.g.
        ``plan.update(lambda t: t.c.id == exhibitor_id)``.
        """
        tbl = self.table()
        stmt = tbl.update().values({a.column: a.expression() for a in self.assignments})
        for clause in where:
            stmt = stmt.where(clause(tbl))
        return stmt.returning(*tbl.c)


# ============================================================
# Builder
# ============================================================


@dataclass(frozen=True)
class RecordBuilder:
    """Evaluate a field descriptor table against a live column set.

    Attributes:
        table_name: Target table
        fields: Descriptors evaluated in order; earlier keys claim columns first
        status_default: Bound to ``status`` on insert when no field claimed it
        managed_timestamps: Append ``created_at``/``updated_at`` as ``now()``
    """

    table_name: str
    fields: Sequence[FieldSpec]
    status_default: str | None = None
    managed_timestamps: bool = True

    def build(
        self,
        payload: Mapping[str, Any],
        live_columns: ColumnSet,
        *,
        extra: Mapping[str, Any] | None = None,
        partial: bool = False,
    ) -> RecordPlan:
        """Resolve the payload into a record plan.

        Args:
            payload: Logical values with camelCase or snake_case keys
            live_columns: Column set from the schema inspector
            extra: Physical column values set by the caller (e.g. password_hash);
                applied after the field table, skipped when the column is
                missing or already taken
            partial: Update mode. Only keys present in the payload are
                written, no status default, and only ``updated_at`` is touched

        Returns:
            RecordPlan ready to render as an insert or update

        Raises:
            ConfigurationError: If no column could be resolved at all
        """
        assignments: list[ColumnAssignment] = []
        taken: set[str] = set()

        for spec in self.fields:
            if partial and not spec.is_present(payload):
                continue
            target = next(
                (c for c in spec.columns if c in live_columns and c not in taken),
                None,
            )
            if target is None:
                continue
            assignments.append(
                ColumnAssignment(column=target, value=spec.value_from(payload), source_key=spec.key)
            )
            taken.add(target)

        for name, value in (extra or {}).items():
            if name in live_columns and name not in taken:
                assignments.append(ColumnAssignment(column=name, value=value))
                taken.add(name)

        if not partial and self.status_default is not None:
            if "status" in live_columns and "status" not in taken:
                assignments.append(ColumnAssignment(column="status", value=self.status_default))
                taken.add("status")

        if self.managed_timestamps:
            stamped = ("updated_at",) if partial else SERVER_TIMESTAMP_COLUMNS
            for name in stamped:
                if name in live_columns and name not in taken:
                    assignments.append(ColumnAssignment(column=name, server_now=True))
                    taken.add(name)

        if not assignments:
            raise ConfigurationError(
                f"No matching columns found in {self.table_name} table",
                error_code="no_matching_columns",
                details={"table": self.table_name},
            )

        return RecordPlan(
            table_name=self.table_name,
            live_columns=live_columns,
            assignments=tuple(assignments),
        )
