"""Latency statistics value object.

Defines the immutable result of :func:`latency_stats.base.stats.compute`:
aggregate distribution figures for a whole run plus per-chunk series. Kept
separate to follow the one-class-per-file layout of ``stats_parts``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from .duration import Duration

if TYPE_CHECKING:
    from ....persistence.interfaces.store import MetricStore, WriteResult


@dataclass(frozen=True)
class LatencyStatistics:
    """Immutable snapshot of a run's latency distribution (nanoseconds).

    Attributes:
        sample_count: Number of latency samples the statistics were built from.
        mean_ns: Truncated arithmetic mean.
        median_ns: Median (mean of the two middle values for even counts, truncated).
        stddev_ns: ``E[X^2] - E[X]^2`` with integer division. This is the
            population variance, not its square root; the name is kept for
            compatibility with stored results.
        min_ns: Smallest sample.
        max_ns: Largest sample.
        p90_ns, p95_ns, p97_ns, p99_ns: Nearest-rank percentiles.
        chunk_means, chunk_medians, chunk_mins, chunk_maxs, chunk_p90s,
        chunk_p95s, chunk_p99s: One entry per contiguous chunk of samples, in
            chunk order. All empty when chunking was disabled or there were no
            samples.
    """

    sample_count: int = 0
    mean_ns: int = 0
    median_ns: int = 0
    stddev_ns: int = 0
    min_ns: int = 0
    max_ns: int = 0
    p90_ns: int = 0
    p95_ns: int = 0
    p97_ns: int = 0
    p99_ns: int = 0

    chunk_means: Tuple[int, ...] = ()
    chunk_medians: Tuple[int, ...] = ()
    chunk_mins: Tuple[int, ...] = ()
    chunk_maxs: Tuple[int, ...] = ()
    chunk_p90s: Tuple[int, ...] = ()
    chunk_p95s: Tuple[int, ...] = ()
    chunk_p99s: Tuple[int, ...] = ()

    @classmethod
    def empty(cls) -> "LatencyStatistics":
        """Return the zero-valued statistics used for an empty sample set."""
        return cls()

    # -------------------------- Duration Accessors -------------------------- #
    def mean(self) -> Duration:
        """Average latency of an operation."""
        return Duration(self.mean_ns)

    def median(self) -> Duration:
        return Duration(self.median_ns)

    def stddev(self) -> Duration:
        """Dispersion figure as stored (population variance, see class docs)."""
        return Duration(self.stddev_ns)

    def min(self) -> Duration:
        return Duration(self.min_ns)

    def max(self) -> Duration:
        return Duration(self.max_ns)

    def percentile90(self) -> Duration:
        """90th percentile of the operation latencies."""
        return Duration(self.p90_ns)

    def percentile95(self) -> Duration:
        return Duration(self.p95_ns)

    def percentile97(self) -> Duration:
        return Duration(self.p97_ns)

    def percentile99(self) -> Duration:
        """99th percentile of the operation latencies."""
        return Duration(self.p99_ns)

    # -------------------------- Chunk Views -------------------------- #
    @property
    def num_chunks(self) -> int:
        return len(self.chunk_means)

    def chunk(self, index: int) -> Dict[str, int]:
        """Return the metrics of one chunk as a mapping (raises ``IndexError``)."""
        return {
            "chunk_index": range(self.num_chunks)[index],
            "mean": self.chunk_means[index],
            "median": self.chunk_medians[index],
            "min": self.chunk_mins[index],
            "max": self.chunk_maxs[index],
            "p90": self.chunk_p90s[index],
            "p95": self.chunk_p95s[index],
            "p99": self.chunk_p99s[index],
        }

    # -------------------------- Serialization -------------------------- #
    def to_dict(self) -> Dict[str, Any]:
        """Return a dictionary representation suitable for JSON serialization."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = list(value) if isinstance(value, tuple) else value
        return out

    def save(self, run_label: str, store: Optional["MetricStore"]) -> "WriteResult":
        """Persist these statistics under ``run_label`` into ``store``.

        Best-effort: failures (including a missing store) are logged and
        reported through the returned ``WriteResult``; nothing is raised.
        """
        # Local import keeps the value object free of persistence imports.
        from ....service.persist import save_statistics

        return save_statistics(self, run_label, store)

    def __str__(self) -> str:
        from ..report import render_report

        return render_report(self)


__all__ = ["LatencyStatistics"]
