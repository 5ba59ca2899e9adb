"""Latency statistics calculator.

Purpose
-------
Turn a complete batch of per-operation latencies (nanoseconds) into a
:class:`LatencyStatistics`: whole-run mean/dispersion/min/max/median and
nearest-rank percentiles, plus the same figures over fixed-size contiguous
chunks so drift over the course of a run stays visible.

Buffer ownership
----------------
``compute`` SORTS THE CALLER'S BUFFER IN PLACE. Chunks are taken over the
original order before the sort happens; afterwards the buffer is ascending.
Pass a copy (``compute(list(samples))``) when the original order matters
after the call. The buffer must not be touched by anyone else during the call.

Numeric notes
-------------
- Means and the median use truncating integer division.
- ``stddev`` is ``sum_sq // n - mean**2``: the population variance without a
  square root, preserved for compatibility with stored results.
- Python integers do not overflow, so the sum of squares is exact for any
  sample magnitude.
"""

from __future__ import annotations

from typing import List, MutableSequence, Sequence

from ...config.defaults import DEFAULT_CHUNK_SIZE
from ..logging import get_logger, log_event
from .percentile import select_percentile
from .stats_parts.latency_statistics import LatencyStatistics

_log = get_logger(__name__)


def _median(sorted_values: Sequence[int]) -> int:
    n = len(sorted_values)
    if n % 2 == 0:
        return (sorted_values[n // 2] + sorted_values[n // 2 - 1]) // 2
    return sorted_values[n // 2]


def _sort_in_place(samples: MutableSequence[int]) -> None:
    """Sort ``samples`` ascending without replacing the caller's object."""
    if isinstance(samples, list):
        samples.sort()
        return
    for i, value in enumerate(sorted(samples)):
        samples[i] = value


def _check_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise TypeError(f"chunk_size must be an int, got {type(chunk_size).__name__}")
    if chunk_size < 0:
        raise ValueError(f"chunk_size must be >= 0, got {chunk_size}")


class _ChunkSeries:
    """Accumulates per-chunk metrics in chunk order."""

    __slots__ = ("means", "medians", "mins", "maxs", "p90s", "p95s", "p99s")

    def __init__(self) -> None:
        self.means: List[int] = []
        self.medians: List[int] = []
        self.mins: List[int] = []
        self.maxs: List[int] = []
        self.p90s: List[int] = []
        self.p95s: List[int] = []
        self.p99s: List[int] = []

    def add(self, window: Sequence[int]) -> None:
        # private sorted copy; the window itself is never reordered
        ordered = sorted(window)
        self.means.append(sum(ordered) // len(ordered))
        self.medians.append(_median(ordered))
        self.mins.append(ordered[0])
        self.maxs.append(ordered[-1])
        self.p90s.append(select_percentile(ordered, 90))
        self.p95s.append(select_percentile(ordered, 95))
        self.p99s.append(select_percentile(ordered, 99))


def _chunk_series(samples: Sequence[int], chunk_size: int) -> _ChunkSeries:
    series = _ChunkSeries()
    for start in range(0, len(samples), chunk_size):
        series.add(samples[start:start + chunk_size])
    return series


def compute(samples: MutableSequence[int], chunk_size: int = DEFAULT_CHUNK_SIZE) -> LatencyStatistics:
    """Compute whole-run and per-chunk latency statistics.

    Parameters
    ----------
    samples: MutableSequence[int]
        Per-operation latencies in nanoseconds, in capture order. Sorted in
        place by this call (see module docs).
    chunk_size: int
        Samples per chunk; the last chunk may be shorter. ``0`` disables
        chunk statistics.

    Returns
    -------
    LatencyStatistics
        Zero-valued when ``samples`` is empty.

    Raises
    ------
    TypeError
        If ``chunk_size`` is not an integer.
    ValueError
        If ``chunk_size`` is negative or a sample is negative.
    """
    _check_chunk_size(chunk_size)
    n = len(samples)
    if n == 0:
        return LatencyStatistics.empty()

    total = 0
    total_sq = 0
    vmin = samples[0]
    vmax = samples[0]
    for value in samples:
        total += value
        total_sq += value * value
        if value < vmin:
            vmin = value
        elif value > vmax:
            vmax = value
    if vmin < 0:
        raise ValueError(f"latency samples must be non-negative, got {vmin}")

    mean = total // n
    stddev = total_sq // n - mean * mean

    series = _chunk_series(samples, chunk_size) if chunk_size > 0 else _ChunkSeries()

    _sort_in_place(samples)

    stats = LatencyStatistics(
        sample_count=n,
        mean_ns=mean,
        median_ns=_median(samples),
        stddev_ns=stddev,
        min_ns=vmin,
        max_ns=vmax,
        p90_ns=select_percentile(samples, 90),
        p95_ns=select_percentile(samples, 95),
        p97_ns=select_percentile(samples, 97),
        p99_ns=select_percentile(samples, 99),
        chunk_means=tuple(series.means),
        chunk_medians=tuple(series.medians),
        chunk_mins=tuple(series.mins),
        chunk_maxs=tuple(series.maxs),
        chunk_p90s=tuple(series.p90s),
        chunk_p95s=tuple(series.p95s),
        chunk_p99s=tuple(series.p99s),
    )
    log_event(
        _log,
        "stats.compute",
        sample_count=n,
        chunk_size=chunk_size,
        num_chunks=stats.num_chunks,
    )
    return stats


__all__ = ["compute"]
