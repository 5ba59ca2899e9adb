"""SQLite implementation of the ``RecordBuilder`` contract.

A builder only accumulates fields; it never touches the connection. Rows are
written by ``MetricStoreSqlite.write_atomically`` inside a transaction.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from ..interfaces.store import FieldValue
from .helpers import _check_identifier, _to_sqlite_value


class SqliteRecordBuilder:
    """Accumulates one row for ``table`` and renders it as an INSERT."""

    __slots__ = ("_table", "_fields")

    def __init__(self, table: str) -> None:
        self._table = _check_identifier(table, "table")
        self._fields: Dict[str, FieldValue] = {}

    @property
    def table(self) -> str:
        return self._table

    @property
    def fields(self) -> Mapping[str, FieldValue]:
        return MappingProxyType(self._fields)

    def add(self, field: str, value: FieldValue) -> "SqliteRecordBuilder":
        """Add one field; raises ``ValueError`` on invalid or duplicate names."""
        _check_identifier(field, "field")
        if field in self._fields:
            raise ValueError(f"field {field!r} already set on {self._table} record")
        self._fields[field] = value
        return self

    def to_sql(self) -> Tuple[str, List[object]]:
        """Return ``(statement, params)`` for inserting this row."""
        if not self._fields:
            raise ValueError(f"empty record for table {self._table!r}")
        columns = ", ".join(self._fields)
        placeholders = ", ".join("?" for _ in self._fields)
        sql = f"INSERT INTO {self._table} ({columns}) VALUES ({placeholders})"  # nosec B608 - identifiers validated
        return sql, [_to_sqlite_value(v) for v in self._fields.values()]

    def __repr__(self) -> str:
        return f"SqliteRecordBuilder(table={self._table!r}, fields={dict(self._fields)!r})"


__all__ = ["SqliteRecordBuilder"]
