"""Row mapping and value coercion helpers for the SQLite repositories."""

from __future__ import annotations

import re
import sqlite3
from typing import Any

from ...config.defaults import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER
from ..interfaces.repos import LatencyChunkRow, LatencySummaryRow

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str, kind: str) -> str:
    """Return ``name`` if it is a safe SQL identifier, else raise ``ValueError``.

    Table and column names cannot be bound as parameters, so they are
    interpolated into statements and must be validated first.
    """
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"invalid {kind} name: {name!r}")
    return name


def _to_sqlite_value(value: Any) -> Any:
    """Coerce a field value into something SQLite can store.

    Integers outside the signed 64-bit range are stored as REAL; ``bool``
    becomes ``0``/``1``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int) and not SQLITE_MIN_INTEGER <= value <= SQLITE_MAX_INTEGER:
        return float(value)
    return value


def _summary_from_row(row: sqlite3.Row) -> LatencySummaryRow:
    return LatencySummaryRow(
        type=row["type"],
        num_operations=row["num_operations"],
        mean=row["mean"],
        median=row["median"],
        stddev=row["stddev"],
        min=row["min"],
        max=row["max"],
        p90=row["p90"],
        p95=row["p95"],
        p97=row["p97"],
        p99=row["p99"],
    )


def _chunk_from_row(row: sqlite3.Row) -> LatencyChunkRow:
    return LatencyChunkRow(
        type=row["type"],
        chunk_index=int(row["chunk_index"]),
        chunk_mean=float(row["chunk_mean"]),
        chunk_min=float(row["chunk_min"]),
        chunk_max=float(row["chunk_max"]),
        chunk_p90=float(row["chunk_p90"]),
        chunk_p95=float(row["chunk_p95"]),
        chunk_p99=float(row["chunk_p99"]),
    )


__all__ = [
    "_check_identifier",
    "_to_sqlite_value",
    "_summary_from_row",
    "_chunk_from_row",
]
