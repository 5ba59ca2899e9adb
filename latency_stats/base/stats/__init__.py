"""Latency statistics package.

Exports the calculator, the percentile selector, the value types and the
one-line report renderer.
"""

from .stats_parts import Duration, LatencyStatistics
from .percentile import select_percentile
from .calculator import compute
from .report import render_report

__all__ = [
    "Duration",
    "LatencyStatistics",
    "select_percentile",
    "compute",
    "render_report",
]
