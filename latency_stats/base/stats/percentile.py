"""Nearest-rank percentile selection.

The selector picks an existing element; it never interpolates. For small sample
sets this is intentionally biased low (p99 of ten samples is the 9th value),
which keeps results comparable with historical runs.
"""

from __future__ import annotations

from typing import Sequence


def select_percentile(sorted_values: Sequence[int], percentile: int) -> int:
    """Return the nearest-rank ``percentile`` of ``sorted_values``.

    Parameters
    ----------
    sorted_values: Sequence[int]
        Values sorted ascending. Must be non-empty.
    percentile: int
        Target percentile in ``[0, 100]``.

    Returns
    -------
    int
        ``sorted_values[rank]`` where ``pos = percentile * len // 100`` and
        ``rank = pos - 1`` (or ``0`` when ``pos`` is zero).
    """
    pos = (percentile * len(sorted_values)) // 100
    return sorted_values[pos - 1 if pos > 0 else 0]


__all__ = ["select_percentile"]
