"""Human-readable rendering of latency statistics.

The summary is a single line meant for benchmark logs. Per-chunk series are
left out on purpose: they belong to the persisted record, not the summary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .stats_parts.latency_statistics import LatencyStatistics


def render_report(stats: "LatencyStatistics") -> str:
    """Render ``stats`` as one line, durations in their natural unit.

    Example::

        N: 4, mean: 2 ns, median: 2 ns, std. dev.: 3 ns, min: 1 ns, max: 4 ns,
        perc 90: 3 ns, perc 95: 3 ns, perc 97: 3 ns, perc 99: 3 ns

    (wrapped here for width; the output has no line breaks).
    """
    return (
        f"N: {stats.sample_count}, mean: {stats.mean()}, median: {stats.median()}, "
        f"std. dev.: {stats.stddev()}, min: {stats.min()}, max: {stats.max()}, "
        f"perc 90: {stats.percentile90()}, perc 95: {stats.percentile95()}, "
        f"perc 97: {stats.percentile97()}, perc 99: {stats.percentile99()}"
    )


__all__ = ["render_report"]
