"""Tests for the memoized analytics service."""

import threading

import pytest

from fantasy_analytics.analytics import RankingEngine, RankingMetric
from fantasy_analytics.errors import InvalidConfiguration, NoGamesOnDate
from fantasy_analytics.models import ScoringConfigCatalog, ScoringConfiguration, TradeProposal, TradeRecommendation
from fantasy_analytics.service import AnalyticsService, data_fingerprint

from conftest import GAME_DAY


@pytest.fixture
def service(ranking_players, ranking_lines):
    return AnalyticsService(ranking_players, ranking_lines)


def test_rankings_match_engine(service, ranking_players, ranking_lines, default_scoring):
    expected = RankingEngine().rank(ranking_players, ranking_lines, default_scoring, window=2)
    assert service.rankings(default_scoring, window=2) == expected


def test_repeated_request_hits_memo(service, default_scoring):
    first = service.rankings(default_scoring, metric=RankingMetric.TOTAL)
    second = service.rankings(default_scoring, metric="total")

    assert first is second
    assert service.memo.stats() == (1, 1)


def test_different_configurations_do_not_share_results(service, default_scoring):
    base = service.rankings(default_scoring)
    doubled = service.rankings(default_scoring.scaled(2))

    assert doubled.value_for("p2") == 2 * base.value_for("p2")
    assert service.memo.stats() == (0, 2)


def test_concurrent_requests_compute_once(service, default_scoring):
    results = []

    def worker():
        results.append(service.rankings(default_scoring))

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    hits, misses = service.memo.stats()
    assert misses == 1
    assert hits == 5
    assert all(r is results[0] for r in results)


def test_invalid_configuration_is_not_cached(service, default_scoring):
    broken = default_scoring.with_multipliers({"points": float("nan")})

    with pytest.raises(InvalidConfiguration):
        service.rankings(broken)
    assert len(service.memo) == 0


def test_fantasy_points(service, default_scoring):
    results = service.fantasy_points("p1", default_scoring)
    assert [r.value for r in results] == [10.0, 20.0, 30.0]
    assert service.fantasy_points("nobody", default_scoring) == []


def test_consistency_and_hot(service, default_scoring):
    grades = {r.player_id: r.grade for r in service.consistency(default_scoring, window=3)}
    assert grades["p3"] == "A+"
    assert grades["p4"] is None

    hot = service.hot_players(default_scoring, recent_window=1, hot_only=False, player_ids=["p1"])
    assert hot[0].trend_ratio == 1.5


def test_trade(service, default_scoring):
    analysis = service.analyze_trade(TradeProposal({"p2"}, {"p3"}), default_scoring)
    assert analysis.recommendation == TradeRecommendation.FAVORS_A


def test_waiver(waiver_league, default_scoring):
    players, lines, schedule, ratings = waiver_league
    service = AnalyticsService(players, lines)

    recs = service.waiver_recommendations(GAME_DAY, default_scoring, schedule, ratings,
                                          is_available=lambda pid: pid != "a")
    assert [r.player_id for r in recs] == ["b", "d"]

    # Unavailable players still count toward the top-N cut
    recs = service.waiver_recommendations(GAME_DAY, default_scoring, schedule, ratings,
                                          is_available=lambda pid: pid != "a", exclude_top_n=2)
    assert [r.player_id for r in recs] == ["b", "d"]

    with pytest.raises(NoGamesOnDate):
        service.waiver_recommendations(GAME_DAY.replace(year=2030), default_scoring, schedule, ratings)


def test_resolve_scoring():
    custom = ScoringConfiguration("mine", "owner-1", dict(ScoringConfiguration.system_default().multipliers))
    service = AnalyticsService([], [], catalog=ScoringConfigCatalog([custom]))

    assert service.resolve_scoring().id == "system-default"
    assert service.resolve_scoring("owner-1").id == "mine"
    assert service.resolve_scoring("owner-2").id == "system-default"


def test_clear_cache(service, default_scoring):
    service.rankings(default_scoring)
    service.clear_cache()
    assert len(service.memo) == 0


def test_data_fingerprint_ignores_order(ranking_players, ranking_lines):
    assert data_fingerprint(ranking_players, ranking_lines) == \
        data_fingerprint(reversed(ranking_players), list(reversed(ranking_lines)))


def test_uneven_trade_quotes_replacement_level(service, default_scoring):
    analysis = service.analyze_trade(TradeProposal({"p1", "p3"}, {"p2"}), default_scoring)

    assert analysis.net_value == 25.0 - 40.0
    assert any("waiver wire" in line for line in analysis.reasoning)
