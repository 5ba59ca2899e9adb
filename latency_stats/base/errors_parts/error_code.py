"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the configuration, persistence and
CLI layers. Values are lowercase snake_case and are considered a stable public
contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    UNAVAILABLE = "unavailable"
    CONSTRAINT = "constraint"
    SCHEMA = "schema"
    STORAGE = "storage"
    LOCKED = "locked"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
