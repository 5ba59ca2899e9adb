"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Storage failures surface as ``sqlite3`` exception subclasses; this module maps
them (and a few message heuristics for driver-agnostic doubles) onto the
shared taxonomy so the persistence layer can report a status instead of
raising.
"""
from __future__ import annotations

import sqlite3
from typing import Optional

from .error_code import ErrorCode
from .stats_error import StatsError


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions without a precise type."""
    PATTERN_GROUPS = (
        (ErrorCode.LOCKED, ("database is locked", "database is busy")),
        (ErrorCode.CONSTRAINT, ("constraint", "unique")),
        (ErrorCode.SCHEMA, ("no such table", "no such column", "has no column")),
        (ErrorCode.UNAVAILABLE, ("unable to open", "closed database")),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. StatsError passthrough.
        2. sqlite3 integrity errors.
        3. Message heuristics (locks, schema drift, closed handles).
        4. Remaining sqlite3 errors and integer overflow map to ``STORAGE``.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, StatsError):
        return exc.code
    if isinstance(exc, sqlite3.IntegrityError):
        return ErrorCode.CONSTRAINT
    code = _heuristic_from_message(str(exc).lower())
    if code is not None:
        return code
    if isinstance(exc, (sqlite3.Error, OverflowError)):
        return ErrorCode.STORAGE
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
