"""
Structured error exception type.

Wraps configuration, input and storage failures with a normalized `ErrorCode`
for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class StatsError(Exception):
    """Represents a structured latency_stats error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        source: Component where the error originated (e.g., ``"config"``).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    source: str = "latency_stats"
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining source, code, and message."""
        return f"{self.source} {self.code.value}: {self.message}"


__all__ = ["StatsError"]
