"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``latency_stats.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.stats_error import StatsError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "StatsError", "classify_exception"]
