"""SQLite metric store: round trip, atomicity and value coercion."""

from __future__ import annotations

import json
import sqlite3

import pytest

from latency_stats.base.errors import ErrorCode
from latency_stats.base.logging import get_logger
from latency_stats.base.stats import LatencyStatistics, compute
from latency_stats.persistence.memory import InMemoryRecordBuilder
from latency_stats.persistence.sqlite import MetricStoreSqlite, open_metric_store
from latency_stats.service.persist import build_chunk_records, build_summary_record


def _counts(store: MetricStoreSqlite) -> tuple[int, int]:
    repo = store.repository()
    return repo.count_rows("latencies"), repo.count_rows("latencies_chunks")


def test_save_round_trip(conn):
    store = MetricStoreSqlite(conn)
    stats = compute(list(range(250)), chunk_size=100)
    result = stats.save("insert", store)
    assert result.ok  # nosec B101
    assert result.rows_written == 4  # nosec B101

    repo = store.repository()
    summary = repo.get_summary("insert")
    assert summary is not None  # nosec B101
    assert summary.num_operations == 250  # nosec B101
    assert summary.mean == 124  # nosec B101
    assert (summary.min, summary.max) == (0, 249)  # nosec B101
    assert summary.p99 == stats.p99_ns  # nosec B101

    chunks = repo.list_chunks("insert")
    assert [c.chunk_index for c in chunks] == [0, 1, 2]  # nosec B101
    assert [c.chunk_mean for c in chunks] == [49.0, 149.0, 224.0]  # nosec B101
    assert all(c.type == "insert" for c in chunks)  # nosec B101


def test_chunk_metrics_stored_as_real(conn):
    store = MetricStoreSqlite(conn)
    compute([5, 1, 9, 3], chunk_size=2).save("update", store)
    kinds = {row[0] for row in conn.execute("SELECT typeof(chunk_mean) FROM latencies_chunks")}
    assert kinds == {"real"}  # nosec B101


def test_failed_row_rolls_back_whole_batch(conn):
    store = MetricStoreSqlite(conn)
    stats = compute(list(range(10)), chunk_size=5)
    records = [build_summary_record(stats, "insert", store)]
    records.extend(build_chunk_records(stats, "insert", store))
    # missing NOT NULL columns
    records.append(store.begin_record("latencies").add("type", "broken"))

    result = store.write_atomically(records)
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.CONSTRAINT  # nosec B101
    assert result.rows_written == 0  # nosec B101
    assert _counts(store) == (0, 0)  # nosec B101
    assert not conn.in_transaction  # nosec B101


def test_unknown_table_is_schema_failure(conn):
    store = MetricStoreSqlite(conn)
    records = [
        store.begin_record("latencies_chunks").add("type", "x").add("chunk_index", 0),
        store.begin_record("no_such_table").add("type", "x"),
    ]
    result = store.write_atomically(records)
    assert result.error_code is ErrorCode.SCHEMA  # nosec B101
    assert _counts(store) == (0, 0)  # nosec B101


def test_invalid_identifiers(conn):
    store = MetricStoreSqlite(conn)
    with pytest.raises(ValueError):
        store.begin_record("latencies; DROP TABLE latencies")
    with pytest.raises(ValueError):
        store.begin_record("latencies").add("bad-column", 1)
    with pytest.raises(ValueError):
        store.begin_record("latencies").add("type", "a").add("type", "b")

    foreign = InMemoryRecordBuilder("latencies").add("bad-column", 1)
    result = store.write_atomically([foreign])
    assert result.error_code is ErrorCode.VALIDATION  # nosec B101


def test_empty_batch_is_a_successful_noop(conn):
    result = MetricStoreSqlite(conn).write_atomically([])
    assert result.ok and result.rows_written == 0  # nosec B101


def test_integers_beyond_64_bits_stored_as_real(conn):
    store = MetricStoreSqlite(conn)
    stats = LatencyStatistics(sample_count=1, mean_ns=2**70, min_ns=2**70, max_ns=2**70)
    assert stats.save("huge", store).ok  # nosec B101
    kind = conn.execute("SELECT typeof(mean) FROM latencies").fetchone()[0]
    assert kind == "real"  # nosec B101
    assert store.repository().get_summary("huge").mean == float(2**70)  # nosec B101


def test_repeated_saves_append_and_latest_wins(conn):
    store = MetricStoreSqlite(conn)
    compute([1, 2, 3], chunk_size=0).save("insert", store)
    compute([10, 20, 30, 40], chunk_size=0).save("insert", store)
    compute([5], chunk_size=0).save("delete", store)
    repo = store.repository()
    assert repo.count_rows("latencies") == 3  # nosec B101
    assert repo.get_summary("insert").num_operations == 4  # nosec B101
    assert list(repo.list_types()) == ["delete", "insert"]  # nosec B101
    assert repo.get_summary("missing") is None  # nosec B101
    with pytest.raises(ValueError):
        repo.count_rows("sqlite_master")


def test_rollback_is_logged(conn, capsys):
    get_logger("latency_stats.test")
    store = MetricStoreSqlite(conn)
    store.write_atomically([store.begin_record("latencies").add("type", "broken")])
    events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.strip()]
    rollback = [e for e in events if e.get("event") == "store.write.rollback"]
    assert rollback and rollback[-1]["level"] == "WARNING"  # nosec B101
    assert rollback[-1]["error_code"] == "constraint"  # nosec B101


def test_open_metric_store_owns_connection(db_file):
    with open_metric_store(str(db_file)) as store:
        assert compute([1, 2], chunk_size=1).save("insert", store).rows_written == 3  # nosec B101
        conn = store.connection
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")

    with open_metric_store(str(db_file)) as store:
        assert store.repository().count_rows("latencies_chunks") == 2  # nosec B101


def test_borrowed_connection_left_open(conn):
    with MetricStoreSqlite(conn):
        pass
    assert conn.execute("SELECT 1").fetchone()[0] == 1  # nosec B101
