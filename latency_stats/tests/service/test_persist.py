"""Best-effort persistence of computed statistics."""

from __future__ import annotations

import json
import sqlite3

from latency_stats.base.errors import ErrorCode
from latency_stats.base.logging import get_logger
from latency_stats.base.stats import LatencyStatistics, compute
from latency_stats.persistence.memory import InMemoryMetricStore, InMemoryRecordBuilder
from latency_stats.service.persist import save_statistics


def _events(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class _RaisingStore:
    """Store double whose write raises instead of reporting a status."""

    def begin_record(self, table: str) -> InMemoryRecordBuilder:
        return InMemoryRecordBuilder(table)

    def write_atomically(self, records):
        raise sqlite3.OperationalError("database is locked")


def test_summary_and_chunk_rows(memory_store):
    stats = compute([5, 1, 9, 3, 7], chunk_size=2)
    result = save_statistics(stats, "insert", memory_store)
    assert result.ok and result.rows_written == 4  # nosec B101

    (summary,) = memory_store.rows("latencies")
    assert list(summary) == [  # nosec B101
        "type", "num_operations", "mean", "median", "stddev",
        "min", "max", "p90", "p95", "p97", "p99",
    ]
    assert summary["type"] == "insert"  # nosec B101
    assert summary["num_operations"] == 5  # nosec B101
    assert summary["median"] == 5  # nosec B101

    chunks = memory_store.rows("latencies_chunks")
    assert [c["chunk_index"] for c in chunks] == [0, 1, 2]  # nosec B101
    assert [c["chunk_mean"] for c in chunks] == [3.0, 6.0, 7.0]  # nosec B101
    assert all(isinstance(c["chunk_p99"], float) for c in chunks)  # nosec B101
    assert "chunk_median" not in chunks[0]  # nosec B101


def test_empty_statistics_write_only_summary(memory_store):
    result = LatencyStatistics.empty().save("idle", memory_store)
    assert result.rows_written == 1  # nosec B101
    assert memory_store.rows("latencies")[0]["num_operations"] == 0  # nosec B101
    assert memory_store.rows("latencies_chunks") == []  # nosec B101


def test_missing_store_is_reported_not_raised(capsys):
    get_logger("latency_stats.test")
    result = compute([1, 2, 3]).save("insert", None)
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.UNAVAILABLE  # nosec B101
    events = [e for e in _events(capsys.readouterr().err) if e.get("event") == "stats.save.unavailable"]
    assert events and events[-1]["level"] == "ERROR"  # nosec B101
    assert events[-1]["run_label"] == "insert"  # nosec B101


def test_failed_write_is_logged_and_nothing_committed(capsys):
    get_logger("latency_stats.test")
    store = InMemoryMetricStore(fail_at_row=2)
    result = compute(list(range(30)), chunk_size=10).save("update", store)
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.STORAGE  # nosec B101
    assert store.tables() == []  # nosec B101
    failed = [e for e in _events(capsys.readouterr().err) if e.get("event") == "stats.save.failed"]
    assert failed and failed[-1]["error_code"] == "storage"  # nosec B101


def test_raising_store_is_contained():
    result = save_statistics(compute([1, 2]), "insert", _RaisingStore())
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.LOCKED  # nosec B101


def test_start_and_done_events(memory_store, capsys):
    get_logger("latency_stats.test")
    compute([1, 2, 3], chunk_size=1).save("insert", memory_store)
    names = [e.get("event") for e in _events(capsys.readouterr().err)]
    assert names.index("stats.save.start") < names.index("stats.save.done")  # nosec B101


class _ClosedBuilderStore(_RaisingStore):
    """Store double whose connection is already gone when rows are built."""

    def begin_record(self, table: str) -> InMemoryRecordBuilder:
        raise sqlite3.ProgrammingError("Cannot operate on a closed database.")


def test_builder_failure_is_contained(capsys):
    get_logger("latency_stats.test")
    result = compute(list(range(10)), chunk_size=5).save("insert", _ClosedBuilderStore())
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.UNAVAILABLE  # nosec B101
    failed = [e for e in _events(capsys.readouterr().err) if e.get("event") == "stats.save.failed"]
    assert failed and failed[0]["error_code"] == "unavailable"  # nosec B101
