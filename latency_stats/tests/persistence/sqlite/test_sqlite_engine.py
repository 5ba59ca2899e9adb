"""Contract tests for SQLite engine helpers.

These tests validate:
- get_db_path user path expansion and the configured default
- db_session initializes both latency tables and applies PRAGMAs
- init_schema is idempotent
"""

from __future__ import annotations

from pathlib import Path

from latency_stats.persistence.sqlite.engine import (
    MEMORY_DB,
    create_connection,
    db_session,
    get_db_path,
    init_schema,
)


def _columns(conn, table: str) -> list[str]:
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()]


def test_get_db_path_expands_user() -> None:
    expanded = get_db_path(str(Path("~/.local/share/latency_stats.db")))
    assert "~" not in str(expanded)  # nosec B101 - pytest assertion in tests
    assert expanded.is_absolute()  # nosec B101 - pytest assertion in tests


def test_get_db_path_uses_configured_default(monkeypatch, tmp_path: Path) -> None:
    target = tmp_path / "configured.db"
    monkeypatch.setenv("LATENCY_STATS_DB_PATH", str(target))
    assert get_db_path() == target  # nosec B101 - pytest assertion in tests


def test_db_session_initializes_schema_and_pragmas(tmp_path: Path) -> None:
    db_file = tmp_path / "nested" / "stats.db"
    with db_session(str(db_file)) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()}
        assert {"latencies", "latencies_chunks"} <= tables  # nosec B101 - pytest assertion in tests
        journal_mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert str(journal_mode).lower() == "wal"  # nosec B101 - pytest assertion in tests
        busy_timeout = conn.execute("PRAGMA busy_timeout").fetchone()[0]
        assert busy_timeout == 5000  # nosec B101 - pytest assertion in tests
        assert conn.isolation_level is None  # nosec B101 - pytest assertion in tests
    assert db_file.exists()  # nosec B101 - pytest assertion in tests


def test_schema_columns() -> None:
    conn = create_connection(MEMORY_DB)
    try:
        init_schema(conn)
        init_schema(conn)  # idempotent
        assert _columns(conn, "latencies") == [  # nosec B101 - pytest assertion in tests
            "type", "num_operations", "mean", "median", "stddev",
            "min", "max", "p90", "p95", "p97", "p99",
        ]
        assert _columns(conn, "latencies_chunks") == [  # nosec B101 - pytest assertion in tests
            "type", "chunk_index", "chunk_mean", "chunk_min",
            "chunk_max", "chunk_p90", "chunk_p95", "chunk_p99",
        ]
    finally:
        conn.close()
