"""Read-side repository protocol and row DTOs for stored latency statistics.

Concrete implementations live under ``persistence/sqlite/``. These contracts
carry no behavior and introduce no side effects.

Design Principles:
- Dataclasses represent rows crossing the repository boundary.
- Repositories never commit; transaction control belongs to the Unit of Work.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol


@dataclass
class LatencySummaryRow:
    """One row of the ``latencies`` table (all durations in nanoseconds).

    Attributes
    ----------
    type: Run label the statistics were saved under (e.g. ``"insert"``).
    num_operations: Number of samples in the run.
    mean, median, stddev, min, max: Aggregate figures.
    p90, p95, p97, p99: Nearest-rank percentiles.
    """

    type: str
    num_operations: int
    mean: int
    median: int
    stddev: int
    min: int
    max: int
    p90: int
    p95: int
    p97: int
    p99: int


@dataclass
class LatencyChunkRow:
    """One row of the ``latencies_chunks`` table.

    Attributes
    ----------
    type: Run label.
    chunk_index: 0-based position of the chunk within the run.
    chunk_mean, chunk_min, chunk_max, chunk_p90, chunk_p95, chunk_p99:
        Per-chunk figures stored as REAL.
    """

    type: str
    chunk_index: int
    chunk_mean: float
    chunk_min: float
    chunk_max: float
    chunk_p90: float
    chunk_p95: float
    chunk_p99: float


class ILatencyRepo(Protocol):
    """Read access to persisted latency statistics."""

    def get_summary(self, run_label: str) -> Optional[LatencySummaryRow]:
        """Return the most recent summary row for ``run_label``, if any."""
        ...

    def list_chunks(self, run_label: str) -> List[LatencyChunkRow]:
        """Return chunk rows for ``run_label`` ordered by ``chunk_index``."""
        ...

    def list_types(self) -> Iterable[str]:
        """Yield the distinct run labels that have a summary row."""
        ...


__all__ = [
    "LatencySummaryRow",
    "LatencyChunkRow",
    "ILatencyRepo",
]
