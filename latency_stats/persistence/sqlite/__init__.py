from __future__ import annotations

from typing import Optional

from .engine import create_connection, db_session, get_db_path, init_schema
from .latency_repo import LatencyRepoSqlite
from .metric_store import MetricStoreSqlite
from .record_builder import SqliteRecordBuilder
from .unit_of_work import UnitOfWorkSqlite


def open_metric_store(db_path: Optional[str] = None) -> MetricStoreSqlite:
    """Open the SQLite metric store at ``db_path`` (configured default when None)."""
    return MetricStoreSqlite.open(db_path)


__all__ = [
    "create_connection",
    "db_session",
    "get_db_path",
    "init_schema",
    "LatencyRepoSqlite",
    "MetricStoreSqlite",
    "SqliteRecordBuilder",
    "UnitOfWorkSqlite",
    "open_metric_store",
]
