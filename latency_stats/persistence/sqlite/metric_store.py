"""SQLite implementation of the ``MetricStore`` contract.

Rows are collected with :meth:`MetricStoreSqlite.begin_record` and written by
:meth:`MetricStoreSqlite.write_atomically` inside one Unit of Work
transaction. A failed insert is converted into a failed ``WriteResult`` at the
driver boundary; the Unit of Work then rolls the whole batch back, so no
partial batch is ever visible to readers.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional, Sequence, Tuple

from ...base.errors import ErrorCode, classify_exception
from ...base.logging import LogContext, get_logger, log_event
from ..interfaces.store import RecordBuilder, WriteResult
from .engine import create_connection, init_schema
from .latency_repo import LatencyRepoSqlite
from .record_builder import SqliteRecordBuilder
from .unit_of_work import UnitOfWorkSqlite

_log = get_logger(__name__)

Statement = Tuple[str, str, List[object]]  # (table, sql, params)


def _statement(record: RecordBuilder) -> Statement:
    """Render any ``RecordBuilder`` as a validated INSERT statement."""
    if isinstance(record, SqliteRecordBuilder):
        builder = record
    else:
        builder = SqliteRecordBuilder(record.table)
        for name, value in record.fields.items():
            builder.add(name, value)
    sql, params = builder.to_sql()
    return builder.table, sql, params


class MetricStoreSqlite:
    """Durable metric store over a single SQLite connection.

    Parameters
    ----------
    conn:
        Open connection in autocommit mode (see ``engine.create_connection``).
        The latency tables are created if absent.
    owns_connection:
        When True, :meth:`close` (and context exit) closes ``conn``.
    """

    def __init__(self, conn: sqlite3.Connection, *, owns_connection: bool = False) -> None:
        self._conn = conn
        self._owns_connection = owns_connection
        init_schema(conn)

    @classmethod
    def open(cls, db_path: Optional[str] = None) -> "MetricStoreSqlite":
        """Open (creating if needed) the database at ``db_path``."""
        return cls(create_connection(db_path), owns_connection=True)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def repository(self) -> LatencyRepoSqlite:
        """Return a read-side repository bound to this store's connection."""
        return LatencyRepoSqlite(self._conn)

    # -------------------------- MetricStore API -------------------------- #
    def begin_record(self, table: str) -> SqliteRecordBuilder:
        return SqliteRecordBuilder(table)

    def write_atomically(self, records: Sequence[RecordBuilder]) -> WriteResult:
        """Insert every record in one transaction; all or nothing.

        Returns
        -------
        WriteResult
            ``success(len(records))`` after commit, or a failure carrying the
            classified error after rollback.
        """
        try:
            statements = [_statement(r) for r in records]
        except ValueError as exc:
            return WriteResult.failure(ErrorCode.VALIDATION, str(exc))
        if not statements:
            return WriteResult.success(0)

        result = UnitOfWorkSqlite(self._conn).run(lambda conn: self._insert_all(conn, statements))
        if not result.ok:
            log_event(
                _log,
                "store.write.rollback",
                level=logging.WARNING,
                rows=len(statements),
                error_code=result.error_code.value if result.error_code else None,
                error=result.message,
            )
        return result

    @staticmethod
    def _insert_all(conn: sqlite3.Connection, statements: Sequence[Statement]) -> WriteResult:
        for index, (table, sql, params) in enumerate(statements):
            try:
                conn.execute(sql, params)
            except (sqlite3.Error, OverflowError) as exc:
                log_event(
                    _log,
                    "store.insert.failed",
                    LogContext(table=table),
                    level=logging.DEBUG,
                    row=index,
                    error=str(exc),
                )
                return WriteResult.failure(
                    classify_exception(exc),
                    f"insert of row {index} into {table} failed: {exc}",
                )
        return WriteResult.success(len(statements))

    # -------------------------- Lifecycle -------------------------- #
    def close(self) -> None:
        if self._owns_connection:
            self._conn.close()

    def __enter__(self) -> "MetricStoreSqlite":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["MetricStoreSqlite"]
