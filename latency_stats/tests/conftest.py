"""Pytest configuration for the latency_stats test suite.

Provides a file-backed SQLite connection with the latency schema, an
in-memory metric store, and isolation from any ``LATENCY_STATS_*`` settings
present in the developer's environment.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterator

import pytest

from latency_stats.base.logging import get_logger
from latency_stats.config import reset_settings_cache
from latency_stats.config.env import ENV_FIELD_MAP, ENV_CONFIG_FILE
from latency_stats.persistence.memory import InMemoryMetricStore
from latency_stats.persistence.sqlite.engine import create_connection, init_schema


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear settings env vars and the config-file cache around each test.

    The shared log handler is re-bound to the current stderr before and after
    each test so it never keeps writing to a finished capture buffer.
    """
    for name in (*ENV_FIELD_MAP.values(), ENV_CONFIG_FILE):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    get_logger()
    yield
    reset_settings_cache()
    get_logger()


@pytest.fixture()
def db_file(tmp_path: Path) -> Path:
    return tmp_path / "latency_stats.db"


@pytest.fixture()
def conn(db_file: Path) -> Iterator[sqlite3.Connection]:
    """Yield a temp-file SQLite connection with the latency tables created."""
    c = create_connection(str(db_file))
    init_schema(c)
    try:
        yield c
    finally:
        c.close()


@pytest.fixture()
def memory_store() -> InMemoryMetricStore:
    return InMemoryMetricStore()
