"""Connection and schema helpers for the SQLite metric store.

Purpose
-------
Provide centralized helpers for opening SQLite connections and ensuring the
latency tables exist.

External dependencies
---------------------
- ``sqlite3`` from the standard library; importing this module opens nothing.

Connection settings
-------------------
- Applies ``busy_timeout`` (milliseconds) from
  ``latency_stats.config.defaults`` to mitigate lock contention.
- Enables WAL journaling and NORMAL synchronous mode.
- Opens connections with ``isolation_level=None`` so that transaction
  boundaries are issued explicitly by the Unit of Work (``BEGIN`` /
  ``COMMIT`` / ``ROLLBACK``) and nothing is committed implicitly.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ...config.defaults import (
    CHUNKS_TABLE,
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
    SUMMARY_TABLE,
)

MEMORY_DB = ":memory:"


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Resolve the database file location.

    Parameters
    ----------
    db_path:
        Optional string path. When ``None``, the configured default from
        ``get_settings().db_path`` is used. Values are passed through
        ``Path.expanduser()`` to allow ``~`` home shortcuts.
    """
    if not db_path:
        from ...config import get_settings

        db_path = get_settings().db_path
    return Path(db_path).expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    Behavior
    --------
    - ``":memory:"`` opens a private in-memory database.
    - Otherwise ensures the parent directory exists before opening the file.
    - Autocommit mode (``isolation_level=None``); see module docs.

    Returns
    -------
    sqlite3.Connection
        An open connection with ``row_factory`` set to ``sqlite3.Row``.
    """
    if db_path == MEMORY_DB:
        conn = sqlite3.connect(MEMORY_DB, isolation_level=None)
    else:
        path = get_db_path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path), isolation_level=None)
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
        conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the latency tables if they do not exist.

    Schema overview
    ---------------
    - ``latencies``: one summary row per saved run (integer nanoseconds)
    - ``latencies_chunks``: one row per chunk per saved run (REAL nanoseconds)
    """
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {SUMMARY_TABLE} (
            type TEXT NOT NULL,
            num_operations INTEGER NOT NULL,
            mean INTEGER NOT NULL,
            median INTEGER NOT NULL,
            stddev INTEGER NOT NULL,
            min INTEGER NOT NULL,
            max INTEGER NOT NULL,
            p90 INTEGER NOT NULL,
            p95 INTEGER NOT NULL,
            p97 INTEGER NOT NULL,
            p99 INTEGER NOT NULL
        );
        """
    )
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {CHUNKS_TABLE} (
            type TEXT NOT NULL,
            chunk_index INTEGER NOT NULL,
            chunk_mean REAL,
            chunk_min REAL,
            chunk_max REAL,
            chunk_p90 REAL,
            chunk_p95 REAL,
            chunk_p99 REAL
        );
        """
    )


@contextmanager
def db_session(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Context manager yielding a connection with schema initialized.

    Always closes the connection on exit. Transaction control stays with the
    caller (see ``UnitOfWorkSqlite``).
    """
    conn = create_connection(db_path)
    try:
        init_schema(conn)
        yield conn
    finally:
        conn.close()


__all__ = [
    "MEMORY_DB",
    "get_db_path",
    "create_connection",
    "init_schema",
    "db_session",
]
