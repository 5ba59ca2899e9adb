"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `latency_stats.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .stats_error import StatsError
from .classification import classify_exception

__all__ = ["ErrorCode", "StatsError", "classify_exception"]
