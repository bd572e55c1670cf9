"""Tests for CSV / JSON loaders."""

import json
from dataclasses import fields
from datetime import date

import pytest

from fantasy_analytics.data import (
    load_defensive_ratings, load_players, load_schedule, load_scoring_configs, load_stat_lines,
)
from fantasy_analytics.errors import DataLoadError
from fantasy_analytics.models import Position, StatCategory


def _write(path, text):
    path.write_text(text.strip() + "\n")
    return path


def test_stat_lines_with_box_score_headers(tmp_path):
    path = _write(tmp_path / "stats.csv", """
Player,Game,Date,Opp,PTS,REB,AST,STL,BLK,3PM,TOV
p1,g1,2024-01-05,LAL,20,10,5,2,1,2,3
p1,g2,2024-01-07,BOS,31,,4,1,0,5,2
""")
    lines = load_stat_lines(path)

    assert len(lines) == 2
    first, second = lines
    assert first.player_id == "p1"
    assert first.date == date(2024, 1, 5)
    assert first.opponent_team == "LAL"
    assert first.get(StatCategory.THREES) == 2.0
    assert second.get("rebounds") == 0.0


def test_duplicate_stat_line(tmp_path):
    path = _write(tmp_path / "stats.csv", """
player_id,game_id,date,points
p1,g1,2024-01-05,20
p1,g1,2024-01-05,22
""")
    with pytest.raises(DataLoadError):
        load_stat_lines(path)


def test_invalid_date(tmp_path):
    path = _write(tmp_path / "stats.csv", """
player_id,game_id,date,points
p1,g1,2024-01-05,20
p1,g2,not-a-date,22
""")
    with pytest.raises(DataLoadError):
        load_stat_lines(path)


def test_negative_stat(tmp_path):
    path = _write(tmp_path / "stats.csv", """
player_id,game_id,date,points
p1,g1,2024-01-05,-4
""")
    with pytest.raises(DataLoadError):
        load_stat_lines(path)


def test_missing_columns(tmp_path):
    path = _write(tmp_path / "stats.csv", """
player_id,points
p1,20
""")
    with pytest.raises(DataLoadError):
        load_stat_lines(path)


def test_missing_file(tmp_path):
    with pytest.raises(DataLoadError):
        load_stat_lines(tmp_path / "nope.csv")


def test_players(tmp_path):
    path = _write(tmp_path / "players.csv", """
player_id,name,team,pos
p1,Guard One,BOS,PG
p2,Big Two,LAL,F-C
p3,Mystery,NYK,XX
""")
    players = load_players(path)

    assert [p.position for p in players] == [Position.G, Position.F_C, None]
    assert players[0].name == "Guard One"
    assert [f.name for f in fields(players[0])] == ["player_id", "name", "team", "position"]


def test_schedule(tmp_path):
    path = _write(tmp_path / "schedule.csv", """
game_id,date,home,away
g1,2024-02-01,BOS,LAL
""")
    game, = load_schedule(path)

    assert game.date == date(2024, 2, 1)
    assert game.opponent_of("LAL") == "BOS"
    assert game.opponent_of("NYK") is None


def test_defensive_ratings(tmp_path):
    path = _write(tmp_path / "ratings.csv", """
Team,DRtg
BOS,110.5
LAL,
""")
    assert load_defensive_ratings(path) == {"BOS": 110.5}


def test_scoring_configs(tmp_path):
    path = tmp_path / "configs.json"
    path.write_text(json.dumps([
        {"id": "c1", "ownerId": "u1", "multipliers": {"pts": 1, "reb": 1, "ast": 1, "stl": 2,
                                                      "blk": 2, "3pm": 1, "tov": -1}},
    ]))
    config, = load_scoring_configs(path)

    assert config.id == "c1"
    assert config.multiplier("steals") == 2


def test_scoring_configs_bad_json(tmp_path):
    path = tmp_path / "configs.json"
    path.write_text("{not json")
    with pytest.raises(DataLoadError):
        load_scoring_configs(path)


def test_ids_keep_leading_zeros(tmp_path):
    path = _write(tmp_path / "stats.csv", """
playerId,gameId,date,points
007,0042,2024-01-05,20
""")
    line, = load_stat_lines(path)

    assert line.player_id == "007"
    assert line.game_id == "0042"
    assert line.get("points") == 20.0


def test_players_keep_leading_zeros(tmp_path):
    path = _write(tmp_path / "players.csv", """
Player,Name,Team
0123,Zero Lead,BOS
""")
    player, = load_players(path)
    assert player.player_id == "0123"


def test_non_numeric_category(tmp_path):
    path = _write(tmp_path / "stats.csv", """
player_id,game_id,date,PTS
p1,g1,2024-01-05,twenty
""")
    with pytest.raises(DataLoadError, match="points"):
        load_stat_lines(path)
