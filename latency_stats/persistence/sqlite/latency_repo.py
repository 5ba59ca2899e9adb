"""SQLite-backed implementation of ``ILatencyRepo``.

Reads back persisted summaries and chunk rows. No implicit commits; the Unit
of Work governs transactions.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable, List, Optional

from ...config.defaults import CHUNKS_TABLE, SUMMARY_TABLE
from ..interfaces.repos import ILatencyRepo, LatencyChunkRow, LatencySummaryRow
from .helpers import _chunk_from_row, _summary_from_row


class LatencyRepoSqlite(ILatencyRepo):
    """Read access to the ``latencies`` and ``latencies_chunks`` tables.

    Saving the same run label twice appends rows; ``get_summary`` returns the
    latest summary and ``list_chunks`` returns every chunk row for the label in
    insertion order within each index.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        if self.conn.row_factory is not sqlite3.Row:
            self.conn.row_factory = sqlite3.Row

    def get_summary(self, run_label: str) -> Optional[LatencySummaryRow]:
        cur = self.conn.execute(
            f"SELECT * FROM {SUMMARY_TABLE} WHERE type = ? ORDER BY rowid DESC LIMIT 1",  # nosec B608 - constant table name
            (run_label,),
        )
        row = cur.fetchone()
        return _summary_from_row(row) if row is not None else None

    def list_chunks(self, run_label: str) -> List[LatencyChunkRow]:
        cur = self.conn.execute(
            f"SELECT * FROM {CHUNKS_TABLE} WHERE type = ? ORDER BY chunk_index, rowid",  # nosec B608 - constant table name
            (run_label,),
        )
        return [_chunk_from_row(r) for r in cur.fetchall()]

    def list_types(self) -> Iterable[str]:
        cur = self.conn.execute(
            f"SELECT DISTINCT type FROM {SUMMARY_TABLE} ORDER BY type"  # nosec B608 - constant table name
        )
        for r in cur.fetchall():
            yield r[0]

    def count_rows(self, table: str) -> int:
        """Return the number of rows in one of the latency tables."""
        if table not in (SUMMARY_TABLE, CHUNKS_TABLE):
            raise ValueError(f"unknown latency table: {table!r}")
        cur = self.conn.execute(f"SELECT COUNT(*) FROM {table}")  # nosec B608 - allow-listed table
        return int(cur.fetchone()[0])


__all__ = ["LatencyRepoSqlite"]
