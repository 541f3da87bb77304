"""Shared base class for the Postgres-backed document repositories.

Each repository maps one table onto one pydantic model. Columns listed in
``json_fields`` are stored as ``JSONB`` and wrapped with :class:`Json` on the
way in; every other value is passed to psycopg2 as-is (lists become arrays).
Queries that return a row go through :meth:`BaseRepository._returning`, which
raises :class:`RecordNotFoundError` when the statement matched nothing.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ClassVar, Dict, Generic, Mapping, Optional, Sequence, Type, TypeVar
from uuid import UUID

from psycopg2.errors import UniqueViolation
from psycopg2.extensions import connection as PsycopgConnection
from psycopg2.extensions import cursor as PsycopgCursor
from psycopg2.extras import Json, RealDictCursor

from vidshare.db import ConnectionFactory
from vidshare.models.base import VidshareBaseModel

ModelT = TypeVar("ModelT", bound=VidshareBaseModel)
Row = Dict[str, object]


class RepositoryError(RuntimeError):
    """Base exception raised for repository layer failures."""


class RecordNotFoundError(RepositoryError):
    """Raised when a statement that should touch a row matched none."""


class DuplicateRecordError(RepositoryError):
    """Raised when an insert violates a uniqueness constraint."""


def as_db_id(value: object) -> object:
    """Return ``value`` in the form psycopg2 can bind for a ``UUID`` column."""

    return str(value) if isinstance(value, UUID) else value


class BaseRepository(Generic[ModelT]):
    """Insert, update, read and delete one model type in one table."""

    table_name: ClassVar[str]
    model_type: ClassVar[Type[ModelT]]
    insert_fields: ClassVar[Sequence[str]]
    update_fields: ClassVar[Sequence[str]]
    json_fields: ClassVar[Sequence[str]] = ()
    auto_timestamp_field: ClassVar[Optional[str]] = None

    def __init__(self, connection_factory: ConnectionFactory) -> None:
        self._connection_factory = connection_factory

    def insert(self, model: ModelT) -> ModelT:
        """Persist a new row; the database assigns ``id`` and timestamps."""

        payload = self._columns(model, self.insert_fields, include_none=False)
        columns = ", ".join(payload)
        values = ", ".join(f"%({name})s" for name in payload)
        try:
            return self._returning(
                f"INSERT INTO {self.table_name} ({columns}) VALUES ({values}) RETURNING *",
                payload,
            )
        except UniqueViolation as exc:
            raise DuplicateRecordError(f"Duplicate record for {self.table_name}: {exc.pgerror}") from exc

    def update(self, model: ModelT, *, include_none: bool = False) -> ModelT:
        """Write the model's updatable columns back to the row with its ``id``."""

        record_id = getattr(model, "id", None)
        if record_id is None:
            raise RepositoryError("Update requires the model to include an `id` field.")

        payload = self._columns(model, self.update_fields, include_none=include_none)
        assignments = [f"{name} = %({name})s" for name in payload]
        if self.auto_timestamp_field:
            assignments.append(f"{self.auto_timestamp_field} = NOW()")
        if not payload:
            raise RepositoryError("No fields provided for update.")

        payload["id"] = as_db_id(record_id)
        return self._returning(
            f"UPDATE {self.table_name} SET {', '.join(assignments)} WHERE id = %(id)s RETURNING *",
            payload,
        )

    def get_by_id(self, record_id: object) -> ModelT:
        return self._returning(f"SELECT * FROM {self.table_name} WHERE id = %(id)s", {"id": as_db_id(record_id)})

    def delete_by_id(self, record_id: object) -> None:
        self._fetch_row(
            f"DELETE FROM {self.table_name} WHERE id = %(id)s RETURNING id",
            {"id": as_db_id(record_id)},
        )

    def find_first(self, where_clause: str, params: Mapping[str, object]) -> Optional[ModelT]:
        """Return the first row matching ``where_clause`` or ``None``."""

        try:
            return self._returning(f"SELECT * FROM {self.table_name} WHERE {where_clause} LIMIT 1", params)
        except RecordNotFoundError:
            return None

    def fetch_all(
        self,
        where_clause: Optional[str] = None,
        params: Optional[Mapping[str, object]] = None,
        *,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[ModelT]:
        """Return all records, optionally filtered, ordered and limited."""

        query = f"SELECT * FROM {self.table_name}"
        if where_clause:
            query += f" WHERE {where_clause}"
        if order_by:
            query += f" ORDER BY {order_by}"
        if limit is not None:
            query += f" LIMIT {int(limit)}"

        with self._connection() as connection:
            with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params or {})
                return [self.model_type.model_validate(dict(row)) for row in cursor.fetchall()]

    def _columns(self, model: ModelT, names: Sequence[str], *, include_none: bool) -> Row:
        dumped = model.model_dump(mode="json")
        payload: Row = {}
        for name in names:
            value = dumped.get(name)
            if value is None and not include_none:
                continue
            payload[name] = Json(value) if name in self.json_fields and value is not None else value
        return payload

    def _returning(self, query: str, params: Mapping[str, object]) -> ModelT:
        return self.model_type.model_validate(self._fetch_row(query, params))

    def _fetch_row(self, query: str, params: Mapping[str, object]) -> Row:
        with self._connection() as connection:
            with connection.cursor(cursor_factory=RealDictCursor) as cursor:
                return self._fetch_row_with(cursor, query, params)

    @staticmethod
    def _fetch_row_with(cursor: PsycopgCursor, query: str, params: Mapping[str, object]) -> Row:
        cursor.execute(query, params)
        row = cursor.fetchone()
        if row is None:
            raise RecordNotFoundError(f"No records returned for query: {query!r}")
        return dict(row)

    def _connection(self) -> AbstractContextManager[PsycopgConnection]:
        return self._connection_factory()


__all__ = [
    "BaseRepository",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "RepositoryError",
    "as_db_id",
]
