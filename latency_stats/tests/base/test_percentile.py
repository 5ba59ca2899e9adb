"""Nearest-rank percentile selection."""

from __future__ import annotations

import pytest

from latency_stats.base.stats import select_percentile


def test_nearest_rank_on_hundred_values():
    values = [10 * i for i in range(1, 101)]
    assert select_percentile(values, 90) == 900  # nosec B101
    assert select_percentile(values, 95) == 950  # nosec B101
    assert select_percentile(values, 97) == 970  # nosec B101
    assert select_percentile(values, 99) == 990  # nosec B101


def test_small_sample_is_biased_low():
    values = list(range(1, 11))
    # p99 of ten samples is the 9th value, not the maximum
    assert select_percentile(values, 99) == 9  # nosec B101
    assert select_percentile(values, 90) == 9  # nosec B101


def test_rank_zero_clamps_to_first_element():
    assert select_percentile([42], 99) == 42  # nosec B101
    assert select_percentile([1, 2, 3], 10) == 1  # nosec B101
    assert select_percentile([1, 2, 3], 0) == 1  # nosec B101


def test_empty_input_raises_index_error():
    with pytest.raises(IndexError):
        select_percentile([], 90)
