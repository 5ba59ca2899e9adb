"""Duration value type with natural-unit rendering.

Latencies are kept as integer nanoseconds end to end; :class:`Duration` wraps
such a count so accessors return a typed value instead of a bare ``int`` and
the report can print it in the unit a human would pick (``850 ns``,
``12.40 us``, ``3.05 ms`` ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple

_NANOS_PER_MICRO = 1_000
_NANOS_PER_MILLI = 1_000_000
_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MINUTE = 60 * _NANOS_PER_SECOND
_NANOS_PER_HOUR = 60 * _NANOS_PER_MINUTE

# (upper bound exclusive, divisor, unit) in ascending order
_UNITS: Tuple[Tuple[int, int, str], ...] = (
    (_NANOS_PER_MILLI, _NANOS_PER_MICRO, "us"),
    (_NANOS_PER_SECOND, _NANOS_PER_MILLI, "ms"),
    (_NANOS_PER_MINUTE, _NANOS_PER_SECOND, "s"),
    (_NANOS_PER_HOUR, _NANOS_PER_MINUTE, "min"),
)


@dataclass(frozen=True, order=True)
class Duration:
    """Immutable duration measured in whole nanoseconds.

    Attributes:
        nanoseconds: Exact duration; never rounded.
    """

    nanoseconds: int

    @property
    def microseconds(self) -> float:
        return self.nanoseconds / _NANOS_PER_MICRO

    @property
    def milliseconds(self) -> float:
        return self.nanoseconds / _NANOS_PER_MILLI

    @property
    def seconds(self) -> float:
        return self.nanoseconds / _NANOS_PER_SECOND

    def to_timedelta(self) -> timedelta:
        """Convert to ``datetime.timedelta`` (truncates below one microsecond)."""
        return timedelta(microseconds=self.nanoseconds // _NANOS_PER_MICRO)

    def __int__(self) -> int:
        return self.nanoseconds

    def __str__(self) -> str:
        ns = self.nanoseconds
        magnitude = abs(ns)
        if magnitude < _NANOS_PER_MICRO:
            return f"{ns} ns"
        for bound, divisor, unit in _UNITS:
            # unit chosen after rounding: 999_999 ns is "1.00 ms", not "1000.00 us"
            value = round(ns / divisor, 2)
            if abs(value) < bound // divisor:
                return f"{value:.2f} {unit}"
        return f"{ns / _NANOS_PER_HOUR:.2f} h"


__all__ = ["Duration"]
