"""League schedule model."""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class ScheduledGame:
    game_id: str
    date: date
    home_team: str
    away_team: str

    def opponent_of(self, team: str) -> Optional[str]:
        if team == self.home_team:
            return self.away_team
        if team == self.away_team:
            return self.home_team
        return None


def games_on(schedule: Iterable[ScheduledGame], target_date: date) -> List[ScheduledGame]:
    """Games on ``target_date``, ordered by game id."""
    return sorted((g for g in schedule if g.date == target_date), key=lambda g: g.game_id)


def opponents_by_team(games: Iterable[ScheduledGame]) -> Dict[str, str]:
    """Team -> opponent for a single day's games."""
    matchups = {}
    for game in games:
        matchups[game.home_team] = game.away_team
        matchups[game.away_team] = game.home_team
    return matchups
