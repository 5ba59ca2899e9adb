"""SQLite-backed Unit of Work.

Owns transaction boundaries for a connection opened in autocommit mode
(``isolation_level=None``). Two ways to use it:

- As a context manager: ``BEGIN`` on enter; ``COMMIT`` on a clean exit,
  ``ROLLBACK`` when an exception escapes.
- Through :meth:`UnitOfWorkSqlite.run`: the step returns a ``WriteResult``;
  a successful status commits, a failed one rolls back. Storage errors are
  reported as status values rather than raised.
"""

from __future__ import annotations

import sqlite3
from typing import Callable

from ...base.errors import classify_exception
from ..interfaces.store import WriteResult
from .latency_repo import LatencyRepoSqlite

WriteStep = Callable[[sqlite3.Connection], WriteResult]


class UnitOfWorkSqlite:
    """Unit of Work implementation for SQLite.

    Aggregates the latency repository and manages transaction boundaries.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.latencies = LatencyRepoSqlite(conn)

    @property
    def active(self) -> bool:
        """True while a transaction is open on the connection."""
        return self._conn.in_transaction

    def __enter__(self) -> "UnitOfWorkSqlite":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Commit if no exception was raised; otherwise roll back."""
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    def begin(self) -> None:
        """Open a transaction (``BEGIN IMMEDIATE`` takes the write lock up front)."""
        self._conn.execute("BEGIN IMMEDIATE")

    def commit(self) -> None:
        if self._conn.in_transaction:
            self._conn.execute("COMMIT")

    def rollback(self) -> None:
        """Rollback the current transaction (idempotent)."""
        if self._conn.in_transaction:
            self._conn.execute("ROLLBACK")

    def run(self, step: WriteStep) -> WriteResult:
        """Execute ``step`` in a transaction and settle it by its status.

        Exceptions other than storage errors are programming errors: the
        transaction is rolled back and the exception propagates.
        """
        try:
            self.begin()
        except sqlite3.Error as exc:
            return WriteResult.failure(classify_exception(exc), f"begin failed: {exc}")
        try:
            result = step(self._conn)
        except BaseException:
            self.rollback()
            raise
        if not result.ok:
            self.rollback()
            return result
        try:
            self.commit()
        except sqlite3.Error as exc:
            self.rollback()
            return WriteResult.failure(classify_exception(exc), f"commit failed: {exc}")
        return result


__all__ = ["UnitOfWorkSqlite", "WriteStep"]
