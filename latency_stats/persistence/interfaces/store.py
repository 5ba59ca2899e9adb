"""Metric store contracts.

A metric store is the persistence sink for computed statistics. Callers build
rows with :class:`RecordBuilder` and hand a batch to
:meth:`MetricStore.write_atomically`, which writes all of them in a single
transaction or none of them.

Failure / Error Semantics:
- Writes report their outcome through :class:`WriteResult` instead of raising.
  A failed insert rolls the whole batch back and yields a failed result whose
  ``error_code`` classifies the cause.
- Builders raise ``ValueError`` only for programming errors (invalid table or
  field identifiers, duplicate fields).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Union

from ...base.errors import ErrorCode

FieldValue = Union[str, int, float, None]


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a transactional write.

    Attributes
    ----------
    ok: True when every row was committed.
    rows_written: Number of committed rows (0 on failure).
    error_code: Normalized failure category when ``ok`` is False.
    message: Human-readable failure detail when ``ok`` is False.
    """

    ok: bool
    rows_written: int = 0
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, rows_written: int) -> "WriteResult":
        return cls(ok=True, rows_written=rows_written)

    @classmethod
    def failure(cls, code: ErrorCode, message: str) -> "WriteResult":
        return cls(ok=False, rows_written=0, error_code=code, message=message)


class RecordBuilder(Protocol):
    """Accumulates the typed fields of one row destined for ``table``."""

    @property
    def table(self) -> str:
        ...

    @property
    def fields(self) -> Mapping[str, FieldValue]:
        """Read-only view of the fields added so far, in insertion order."""
        ...

    def add(self, field: str, value: FieldValue) -> "RecordBuilder":
        """Add one field and return the builder for chaining."""
        ...


class MetricStore(Protocol):
    """Persistence sink for latency statistics."""

    def begin_record(self, table: str) -> RecordBuilder:
        """Start a new row for ``table`` (created on first write if absent)."""
        ...

    def write_atomically(self, records: Sequence[RecordBuilder]) -> WriteResult:
        """Insert every record in one all-or-nothing transaction."""
        ...


__all__ = [
    "FieldValue",
    "WriteResult",
    "RecordBuilder",
    "MetricStore",
]
