"""Persistence contracts: metric store protocol, write status, read-side DTOs."""

from .store import FieldValue, MetricStore, RecordBuilder, WriteResult
from .repos import ILatencyRepo, LatencyChunkRow, LatencySummaryRow

__all__ = [
    "FieldValue",
    "MetricStore",
    "RecordBuilder",
    "WriteResult",
    "ILatencyRepo",
    "LatencyChunkRow",
    "LatencySummaryRow",
]
