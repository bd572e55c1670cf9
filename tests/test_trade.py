"""Tests for trade valuation."""

import pytest

from fantasy_analytics.analytics import TradeValueAnalyzer, evaluate_trade
from fantasy_analytics.errors import InvalidTradeProposal
from fantasy_analytics.models import TradeProposal, TradeRecommendation

from conftest import points_lines


def _proposal(a, b):
    return TradeProposal(frozenset(a), frozenset(b))


def test_side_a_worth_more():
    analysis = TradeValueAnalyzer().analyze(_proposal({"a"}, {"b"}), {"a": 50.0, "b": 40.0})

    assert analysis.side_a_value == 50.0
    assert analysis.side_b_value == 40.0
    assert analysis.net_value == -10.0
    assert analysis.recommendation == TradeRecommendation.FAVORS_A
    assert analysis.confidence == pytest.approx(0.2)


@pytest.mark.parametrize("a_values,b_values", [
    ([50.0], [40.0]),
    ([20.5, 13.25], [30.0]),
    ([10.0], [10.4]),
    ([7.1, 8.3, 9.9], [12.2, 13.7]),
])
def test_swapping_sides_negates_result(a_values, b_values):
    side_a = {f"a{i}": v for i, v in enumerate(a_values)}
    side_b = {f"b{i}": v for i, v in enumerate(b_values)}
    values = {**side_a, **side_b}
    analyzer = TradeValueAnalyzer()

    forward = analyzer.analyze(_proposal(side_a, side_b), values)
    backward = analyzer.analyze(_proposal(side_a, side_b).swapped(), values)

    assert backward.net_value == -forward.net_value
    assert backward.recommendation == forward.recommendation.flipped()
    assert backward.confidence == forward.confidence


def test_close_trade_is_fair():
    analysis = TradeValueAnalyzer().analyze(_proposal({"a"}, {"b"}), {"a": 100.0, "b": 104.0})
    assert analysis.recommendation == TradeRecommendation.FAIR


def test_multi_player_sides_sum():
    values = {"a1": 20.0, "a2": 15.0, "b1": 40.0}
    analysis = TradeValueAnalyzer().analyze(_proposal({"a1", "a2"}, {"b1"}), values)

    assert analysis.side_a_value == 35.0
    assert analysis.recommendation == TradeRecommendation.FAVORS_B
    assert analysis.player_values == values
    assert any("fewer player" in line for line in analysis.reasoning)


def test_grade_weighting():
    values = {"a": 50.0, "b": 50.0}
    analyzer = TradeValueAnalyzer()

    unweighted = analyzer.analyze(_proposal({"a"}, {"b"}), values)
    assert unweighted.recommendation == TradeRecommendation.FAIR

    weighted = analyzer.analyze(_proposal({"a"}, {"b"}), values, grades={"a": "A+", "b": "F"})
    assert weighted.side_a_value == pytest.approx(55.0)
    assert weighted.side_b_value == pytest.approx(45.0)
    assert weighted.recommendation == TradeRecommendation.FAVORS_A


@pytest.mark.parametrize("a,b", [
    (set(), {"b"}),
    ({"a"}, set()),
    ({"a", "x"}, {"b", "x"}),
])
def test_invalid_sides(a, b):
    with pytest.raises(InvalidTradeProposal):
        TradeValueAnalyzer().analyze(_proposal(a, b), {"a": 1.0, "b": 1.0, "x": 1.0})


def test_player_without_value():
    with pytest.raises(InvalidTradeProposal):
        TradeValueAnalyzer().analyze(_proposal({"a"}, {"ghost"}), {"a": 10.0})


def test_evaluate_from_stat_lines(default_scoring):
    lines = points_lines("x", [30, 30]) + points_lines("y", [20, 20])
    analysis = evaluate_trade(_proposal({"x"}, {"y"}), lines, default_scoring)

    assert analysis.net_value == -10.0
    assert analysis.recommendation == TradeRecommendation.FAVORS_A


def test_evaluate_with_consistency_weights(default_scoring):
    lines = points_lines("steady", [20, 20, 20]) + points_lines("streaky", [5, 35, 20])
    analysis = evaluate_trade(_proposal({"steady"}, {"streaky"}), lines, default_scoring,
                              weight_by_consistency=True)

    assert analysis.side_a_value > analysis.side_b_value
    assert any("Consistency grades" in line for line in analysis.reasoning)


def test_evaluate_rejects_players_without_games(default_scoring):
    lines = points_lines("x", [30, 30])
    with pytest.raises(InvalidTradeProposal):
        evaluate_trade(_proposal({"x"}, {"nobody"}), lines, default_scoring)


def test_replacement_value_quoted_for_uneven_trades():
    values = {"a1": 20.0, "a2": 15.0, "b1": 40.0}
    analysis = TradeValueAnalyzer().analyze(_proposal({"a1", "a2"}, {"b1"}), values, replacement_value=12.5)

    assert analysis.net_value == 5.0
    assert any("12.5 points from the waiver wire" in line for line in analysis.reasoning)


def test_evaluate_rejects_empty_window(default_scoring):
    lines = points_lines("x", [30, 30]) + points_lines("y", [20, 20])
    with pytest.raises(ValueError):
        evaluate_trade(_proposal({"x"}, {"y"}), lines, default_scoring, window=0)
