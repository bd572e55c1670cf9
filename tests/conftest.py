"""Shared fixtures for analytics tests."""

from datetime import date, timedelta

import pytest

from fantasy_analytics.models import Player, PlayerGameStatLine, Position, ScheduledGame, ScoringConfiguration

SEASON_START = date(2024, 1, 1)
GAME_DAY = date(2024, 2, 1)


def game_date(day: int) -> date:
    return SEASON_START + timedelta(days=day)


def points_lines(player_id: str, points, opponent: str = "OPP"):
    """One stat line per value, on consecutive days, scoring only points."""
    return [
        PlayerGameStatLine(
            player_id=player_id,
            game_id=f"{player_id}-g{i:02d}",
            date=game_date(i),
            opponent_team=opponent,
            stats={"points": value},
        )
        for i, value in enumerate(points)
    ]


@pytest.fixture
def default_scoring():
    return ScoringConfiguration.system_default()


@pytest.fixture
def custom_scoring():
    return ScoringConfiguration(
        id="custom",
        owner_id="owner-1",
        multipliers={
            "points": 1.0,
            "rebounds": 1.25,
            "assists": 1.5,
            "steals": 2.0,
            "blocks": 2.0,
            "threes": 0.5,
            "turnovers": -1.0,
        },
        name="Custom",
    )


@pytest.fixture
def box_score():
    return PlayerGameStatLine(
        player_id="p1",
        game_id="g1",
        date=SEASON_START,
        opponent_team="LAL",
        stats={"points": 20, "rebounds": 10, "assists": 5, "steals": 2,
               "blocks": 1, "threes": 2, "turnovers": 3},
    )


@pytest.fixture
def ranking_players():
    return [
        Player("p1", "Guard One", "BOS", Position.G),
        Player("p2", "Big Two", "LAL", Position.F_C),
        Player("p3", "Center Three", "NYK", Position.C),
        Player("p4", "Bench Four", "MIA", Position.F),
        Player("p5", "Wing Five", "CHI", Position.G_F),
    ]


@pytest.fixture
def ranking_lines():
    """p1 20 avg (3 games), p2 25 avg (2), p3 20 avg (3), p5 20 avg (2), p4 no games."""
    return (
        points_lines("p1", [10, 20, 30])
        + points_lines("p2", [25, 25])
        + points_lines("p3", [20, 20, 20])
        + points_lines("p5", [20, 20])
    )


@pytest.fixture
def waiver_league():
    """
    Game day: BOS hosts LAL, MIA hosts CHI. NYK is idle.

    Projections: a 20 (BOS), b 20 (LAL), c 40 (NYK, idle), d 10 (MIA).
    Ratings average 110; LAL is the weakest defense.
    """
    players = [
        Player("a", "Alpha", "BOS", Position.G),
        Player("b", "Bravo", "LAL", Position.F),
        Player("c", "Charlie", "NYK", Position.C),
        Player("d", "Delta", "MIA", Position.G_F),
        Player("e", "Echo", "BOS", Position.F),
    ]
    lines = (
        points_lines("a", [20, 20])
        + points_lines("b", [20, 20])
        + points_lines("c", [40, 40])
        + points_lines("d", [10, 10])
    )
    schedule = [
        ScheduledGame("g1", GAME_DAY, "BOS", "LAL"),
        ScheduledGame("g2", GAME_DAY, "MIA", "CHI"),
        ScheduledGame("g3", GAME_DAY + timedelta(days=1), "NYK", "BOS"),
    ]
    ratings = {"LAL": 100.0, "BOS": 120.0, "CHI": 110.0, "MIA": 110.0, "NYK": 110.0}
    return players, lines, schedule, ratings
