"""Tests for the fantasy point formula."""

import math

import pytest

from fantasy_analytics.data import frame_from_stat_lines
from fantasy_analytics.errors import InvalidConfiguration
from fantasy_analytics.models import PlayerGameStatLine, ScoringConfiguration, StatCategory
from fantasy_analytics.scoring import (
    chronological, fantasy_point_series, fantasy_points, score_frame, score_game,
)

from conftest import SEASON_START, points_lines


def test_custom_configuration_example(box_score, custom_scoring):
    """20 + 12.5 + 7.5 + 4 + 2 + 1 - 3."""
    assert fantasy_points(box_score, custom_scoring) == 44.0


def test_default_configuration(box_score, default_scoring):
    assert fantasy_points(box_score, default_scoring) == 40.0


def test_same_inputs_same_float(box_score, custom_scoring):
    values = {fantasy_points(box_score, custom_scoring) for _ in range(50)}
    assert len(values) == 1


def test_missing_categories_count_as_zero(default_scoring):
    line = PlayerGameStatLine("p1", "g1", SEASON_START, None, {"pts": 12, "tov": 2})
    assert line.get(StatCategory.REBOUNDS) == 0.0
    assert fantasy_points(line, default_scoring) == 10.0


def test_negative_stat_rejected():
    with pytest.raises(ValueError):
        PlayerGameStatLine("p1", "g1", SEASON_START, None, {"points": -1})


def test_missing_multiplier_raises(box_score):
    config = ScoringConfiguration("partial", "owner-1", {"points": 1.0})
    with pytest.raises(InvalidConfiguration):
        fantasy_points(box_score, config)


def test_non_finite_multiplier_raises(box_score, default_scoring):
    config = default_scoring.with_multipliers({"blocks": math.nan})
    with pytest.raises(InvalidConfiguration):
        fantasy_points(box_score, config)

    config = default_scoring.with_multipliers({"steals": math.inf})
    with pytest.raises(InvalidConfiguration):
        fantasy_points(box_score, config)


def test_unknown_category_raises():
    with pytest.raises(InvalidConfiguration):
        ScoringConfiguration("bad", "owner-1", {"dunks": 3.0})


def test_scaling_multipliers_scales_points(box_score, custom_scoring):
    assert fantasy_points(box_score, custom_scoring.scaled(2)) == 2 * fantasy_points(box_score, custom_scoring)


@pytest.mark.parametrize("factor", [3, 0.5, 1.7])
def test_scaling_by_any_factor(box_score, custom_scoring, factor):
    assert fantasy_points(box_score, custom_scoring.scaled(factor)) == pytest.approx(factor * 44.0)


def test_score_game_carries_ids(box_score, custom_scoring):
    result = score_game(box_score, custom_scoring)
    assert result.player_id == "p1"
    assert result.game_id == "g1"
    assert result.config_id == "custom"
    assert result.value == 44.0


def test_series_is_chronological(default_scoring):
    lines = points_lines("p1", [5, 10, 15])
    assert chronological(reversed(lines)) == lines
    assert fantasy_point_series(list(reversed(lines)), default_scoring) == [5.0, 10.0, 15.0]


def test_score_frame_matches_formula(box_score, custom_scoring):
    lines = [box_score] + points_lines("p2", [7, 11])
    df = score_frame(frame_from_stat_lines(lines), custom_scoring)

    assert list(df['fantasy_points']) == [fantasy_points(l, custom_scoring) for l in lines]


def test_score_frame_rejects_negative_counts(default_scoring):
    df = frame_from_stat_lines(points_lines("p1", [10]))
    df.loc[0, 'rebounds'] = -2
    with pytest.raises(ValueError):
        score_frame(df, default_scoring)
