"""Saving computed latency statistics into a metric store.

Purpose
-------
Map a :class:`LatencyStatistics` onto the persisted schema and write it in one
transaction:

- one ``latencies`` row: ``type``, ``num_operations`` and the nine aggregate
  figures (integer nanoseconds);
- one ``latencies_chunks`` row per chunk: ``type``, ``chunk_index`` and the six
  chunk figures as REAL.

Failure Semantics
-----------------
Persisting latency telemetry is best-effort: it must never abort the enclosing
benchmark run. A missing store or a failed write is logged as a structured
error event and reported through the returned ``WriteResult``; nothing is
raised. A failed write leaves no rows behind (the store rolls back the batch).
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..base.errors import ErrorCode, classify_exception
from ..base.logging import LogContext, get_logger, log_event
from ..base.stats import LatencyStatistics
from ..config.defaults import CHUNKS_TABLE, SUMMARY_TABLE
from ..persistence.interfaces.store import MetricStore, RecordBuilder, WriteResult

_log = get_logger(__name__)


def build_summary_record(stats: LatencyStatistics, run_label: str, store: MetricStore) -> RecordBuilder:
    """Return the ``latencies`` row for ``stats``."""
    return (
        store.begin_record(SUMMARY_TABLE)
        .add("type", run_label)
        .add("num_operations", stats.sample_count)
        .add("mean", stats.mean_ns)
        .add("median", stats.median_ns)
        .add("stddev", stats.stddev_ns)
        .add("min", stats.min_ns)
        .add("max", stats.max_ns)
        .add("p90", stats.p90_ns)
        .add("p95", stats.p95_ns)
        .add("p97", stats.p97_ns)
        .add("p99", stats.p99_ns)
    )


def build_chunk_records(stats: LatencyStatistics, run_label: str, store: MetricStore) -> List[RecordBuilder]:
    """Return one ``latencies_chunks`` row per chunk, in chunk order."""
    records: List[RecordBuilder] = []
    for index in range(stats.num_chunks):
        records.append(
            store.begin_record(CHUNKS_TABLE)
            .add("type", run_label)
            .add("chunk_index", index)
            .add("chunk_mean", float(stats.chunk_means[index]))
            .add("chunk_min", float(stats.chunk_mins[index]))
            .add("chunk_max", float(stats.chunk_maxs[index]))
            .add("chunk_p90", float(stats.chunk_p90s[index]))
            .add("chunk_p95", float(stats.chunk_p95s[index]))
            .add("chunk_p99", float(stats.chunk_p99s[index]))
        )
    return records


def save_statistics(
    stats: LatencyStatistics,
    run_label: str,
    store: Optional[MetricStore],
) -> WriteResult:
    """Persist ``stats`` under ``run_label``; never raises on storage failure.

    Parameters
    ----------
    stats:
        Statistics to persist.
    run_label:
        Value of the ``type`` column (e.g. ``"insert"``, ``"update"``).
    store:
        Target metric store. ``None`` is treated as "persistence unavailable".

    Returns
    -------
    WriteResult
        Success with the number of rows written (summary + chunks), or the
        failure reported by the store.
    """
    ctx = LogContext(run_label=run_label)
    if store is None:
        log_event(
            _log,
            "stats.save.unavailable",
            ctx,
            level=logging.ERROR,
            error_code=ErrorCode.UNAVAILABLE.value,
        )
        return WriteResult.failure(ErrorCode.UNAVAILABLE, "no metric store configured")

    log_event(_log, "stats.save.start", ctx, num_chunks=stats.num_chunks)
    try:
        records = [build_summary_record(stats, run_label, store)]
        records.extend(build_chunk_records(stats, run_label, store))
        result = store.write_atomically(records)
    except Exception as exc:  # stores report failures by status; a raising store is contained here
        result = WriteResult.failure(classify_exception(exc), f"store raised: {exc!r}")

    if result.ok:
        log_event(_log, "stats.save.done", ctx, rows=result.rows_written)
    else:
        log_event(
            _log,
            "stats.save.failed",
            ctx,
            level=logging.ERROR,
            error_code=result.error_code.value if result.error_code else None,
            error=result.message,
        )
    return result


__all__ = [
    "build_summary_record",
    "build_chunk_records",
    "save_statistics",
]
