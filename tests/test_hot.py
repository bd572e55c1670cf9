"""Tests for hot-player detection."""

import pytest

from fantasy_analytics.analytics import HotPlayerDetector, detect_hot_player, trend_direction
from fantasy_analytics.models import HotStatus, TrendDirection


def test_clear_hot_streak():
    result = detect_hot_player("p1", [25.0, 25.0, 25.0], [10.0, 10.0, 10.0])

    assert result.trend_ratio == 2.5
    assert result.is_hot
    assert result.status == HotStatus.HOT
    assert result.delta == 15.0


def test_ratio_at_threshold_is_not_hot():
    result = detect_hot_player("p1", [11.5, 11.5, 11.5], [10.0, 10.0])
    assert not result.is_hot
    assert result.status == HotStatus.NOT_HOT


def test_zero_baseline_not_evaluable():
    result = detect_hot_player("p1", [12.0, 14.0, 15.0], [0.0, 0.0])

    assert result.status == HotStatus.NOT_EVALUABLE
    assert result.trend_ratio is None
    assert not result.is_hot


def test_empty_window_not_evaluable():
    result = detect_hot_player("p1", [], [10.0])
    assert result.not_evaluable
    assert result.recent_average is None


def test_minimum_recent_games():
    result = detect_hot_player("p1", [40.0, 40.0], [10.0, 10.0, 10.0])

    assert result.trend_ratio == 4.0
    assert not result.is_hot


def test_detect_from_series_uses_season_baseline():
    series = [10.0] * 10 + [20.0] * 3
    result = HotPlayerDetector().detect_from_series("p1", series, recent_window=3)

    assert result.recent_average == 20.0
    assert result.baseline_games == 13
    assert result.trend_ratio == pytest.approx(20.0 / (160.0 / 13))
    assert result.is_hot


def test_baseline_window_not_shorter_than_recent():
    with pytest.raises(ValueError):
        HotPlayerDetector().detect_from_series("p1", [10.0] * 10, recent_window=5, baseline_window=3)


def test_scan_orders_by_ratio():
    series = {
        "cold": [20.0] * 5 + [10.0] * 3,
        "warm": [10.0] * 5 + [15.0] * 3,
        "hot": [10.0] * 5 + [30.0] * 3,
        "new": [],
    }
    detector = HotPlayerDetector()

    everyone = detector.scan(series, recent_window=3, hot_only=False)
    assert [r.player_id for r in everyone] == ["hot", "warm", "cold", "new"]

    hot = detector.scan(series, recent_window=3)
    assert [r.player_id for r in hot] == ["hot", "warm"]


def test_trend_direction():
    assert trend_direction(detect_hot_player("p", [12.0], [10.0])) == TrendDirection.UP
    assert trend_direction(detect_hot_player("p", [8.0], [10.0])) == TrendDirection.DOWN
    assert trend_direction(detect_hot_player("p", [10.2], [10.0])) == TrendDirection.STABLE
    assert trend_direction(detect_hot_player("p", [10.0], [0.0])) == TrendDirection.STABLE


@pytest.mark.parametrize("recent_window", [0, -3])
def test_recent_window_must_be_positive(recent_window):
    with pytest.raises(ValueError):
        HotPlayerDetector().detect_from_series("p1", [10.0] * 10, recent_window=recent_window)
