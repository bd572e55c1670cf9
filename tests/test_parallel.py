"""Tests for fan-out helper."""

import pytest

from fantasy_analytics.analytics import fan_out
from fantasy_analytics.config import ParallelConfig


def test_preserves_input_order():
    items = list(range(200))
    assert fan_out(lambda x: x * x, items, max_workers=4) == [x * x for x in items]


def test_small_inputs_run_inline():
    config = ParallelConfig(MIN_PARALLEL_ITEMS=1000)
    assert fan_out(str, [3, 1, 2], config=config) == ["3", "1", "2"]


def test_errors_propagate():
    def fail_on_seven(x):
        if x == 7:
            raise ValueError("seven")
        return x

    with pytest.raises(ValueError):
        fan_out(fail_on_seven, range(100), max_workers=4)


def test_empty():
    assert fan_out(lambda x: x, []) == []
