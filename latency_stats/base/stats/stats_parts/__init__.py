"""One-class-per-file parts for the latency statistics value types."""

from .duration import Duration
from .latency_statistics import LatencyStatistics

__all__ = [
    "Duration",
    "LatencyStatistics",
]
