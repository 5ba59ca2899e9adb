"""Tests for InMemoryMetricStore."""

from __future__ import annotations

import pytest

from latency_stats.base.errors import ErrorCode
from latency_stats.persistence.memory import InMemoryMetricStore


def test_write_and_read_rows(memory_store):
    records = [
        memory_store.begin_record("latencies").add("type", "insert").add("num_operations", 3),
        memory_store.begin_record("latencies_chunks").add("type", "insert").add("chunk_index", 0),
    ]
    result = memory_store.write_atomically(records)
    assert result.ok and result.rows_written == 2  # nosec B101
    assert memory_store.tables() == ["latencies", "latencies_chunks"]  # nosec B101
    assert memory_store.rows("latencies") == [{"type": "insert", "num_operations": 3}]  # nosec B101


def test_rows_returns_copies(memory_store):
    memory_store.write_atomically([memory_store.begin_record("t").add("a", 1)])
    memory_store.rows("t")[0]["a"] = 99
    assert memory_store.rows("t")[0]["a"] == 1  # nosec B101


def test_injected_failure_discards_batch():
    store = InMemoryMetricStore(fail_at_row=1)
    result = store.write_atomically([store.begin_record("t").add("a", 1), store.begin_record("t").add("a", 2)])
    assert not result.ok  # nosec B101
    assert result.error_code is ErrorCode.STORAGE  # nosec B101
    assert store.rows("t") == []  # nosec B101
    assert store.write_calls == 1  # nosec B101


def test_builder_rejects_duplicate_fields(memory_store):
    builder = memory_store.begin_record("t").add("a", 1)
    with pytest.raises(ValueError):
        builder.add("a", 2)
    assert dict(builder.fields) == {"a": 1}  # nosec B101
