"""In-memory implementation of the ``MetricStore`` contract.

Reference implementation for tests and dry runs: rows are kept per table in
Python lists. Batches are applied all-or-nothing, mirroring the SQLite store,
and a failure can be injected at a given row to exercise rollback paths.

Thread safety: Not thread-safe. Use locks if accessing from multiple threads.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from ...base.errors import ErrorCode
from ..interfaces.store import FieldValue, RecordBuilder, WriteResult


class InMemoryRecordBuilder:
    """Plain dictionary-backed record builder."""

    __slots__ = ("_table", "_fields")

    def __init__(self, table: str) -> None:
        self._table = table
        self._fields: Dict[str, FieldValue] = {}

    @property
    def table(self) -> str:
        return self._table

    @property
    def fields(self) -> Mapping[str, FieldValue]:
        return MappingProxyType(self._fields)

    def add(self, field: str, value: FieldValue) -> "InMemoryRecordBuilder":
        if field in self._fields:
            raise ValueError(f"field {field!r} already set on {self._table} record")
        self._fields[field] = value
        return self


class InMemoryMetricStore:
    """Dictionary-backed metric store.

    Parameters
    ----------
    fail_at_row:
        When set, the batch insert fails on that 0-based row of every
        ``write_atomically`` call (the batch is discarded).
    """

    def __init__(self, fail_at_row: Optional[int] = None) -> None:
        self._tables: Dict[str, List[Dict[str, FieldValue]]] = {}
        self.fail_at_row = fail_at_row
        self.write_calls = 0

    def begin_record(self, table: str) -> InMemoryRecordBuilder:
        return InMemoryRecordBuilder(table)

    def write_atomically(self, records: Sequence[RecordBuilder]) -> WriteResult:
        self.write_calls += 1
        staged: Dict[str, List[Dict[str, FieldValue]]] = {}
        for index, record in enumerate(records):
            if self.fail_at_row is not None and index == self.fail_at_row:
                return WriteResult.failure(
                    ErrorCode.STORAGE,
                    f"insert of row {index} into {record.table} failed: injected failure",
                )
            staged.setdefault(record.table, []).append(dict(record.fields))
        for table, rows in staged.items():
            self._tables.setdefault(table, []).extend(rows)
        return WriteResult.success(sum(len(rows) for rows in staged.values()))

    def rows(self, table: str) -> List[Dict[str, FieldValue]]:
        """Return a copy of the committed rows of ``table``."""
        return [dict(r) for r in self._tables.get(table, [])]

    def tables(self) -> List[str]:
        return sorted(self._tables)


__all__ = ["InMemoryRecordBuilder", "InMemoryMetricStore"]
