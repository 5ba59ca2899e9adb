"""latency_stats package

Latency statistics engine for benchmark runs.

Purpose:
    Turn a materialized batch of per-operation latencies (integer nanoseconds)
    into aggregate and chunked distribution statistics, render them as a
    one-line report, and persist them into a metric store.

Public API (re-exported):
    - Version: ``__version__``
    - Computation: :func:`compute`, :func:`select_percentile`
    - Values: :class:`LatencyStatistics`, :class:`Duration`
    - Reporting: :func:`render_report`
    - Persistence: :func:`save_statistics`, :class:`WriteResult`,
      :class:`MetricStore`, :class:`MetricStoreSqlite`, :func:`open_metric_store`,
      :class:`InMemoryMetricStore`
    - Errors: :class:`ErrorCode`, :class:`StatsError`
    - Settings: :func:`get_settings`

Notes:
    - ``compute`` sorts the sample buffer IN PLACE. Pass a copy
      (``compute(list(samples))``) when the original order is still needed.
"""

__version__ = "0.1.0"

from .base.errors import ErrorCode, StatsError
from .base.stats import Duration, LatencyStatistics, compute, render_report, select_percentile
from .config import get_settings
from .persistence.interfaces.store import MetricStore, WriteResult
from .persistence.memory import InMemoryMetricStore
from .persistence.sqlite import MetricStoreSqlite, open_metric_store
from .service.persist import save_statistics

__all__ = [
    "__version__",
    "compute",
    "select_percentile",
    "LatencyStatistics",
    "Duration",
    "render_report",
    "save_statistics",
    "WriteResult",
    "MetricStore",
    "MetricStoreSqlite",
    "open_metric_store",
    "InMemoryMetricStore",
    "ErrorCode",
    "StatsError",
    "get_settings",
]
