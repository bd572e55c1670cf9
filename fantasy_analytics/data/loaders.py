"""CSV / JSON loaders that turn exports into domain objects."""

import json
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd
from loguru import logger

from ..errors import DataLoadError
from ..models.player import Player, Position
from ..models.schedule import ScheduledGame
from ..models.scoring_config import ScoringConfiguration
from ..models.stats import CANONICAL_ORDER, CATEGORY_ALIASES, PlayerGameStatLine, StatCategory

PathLike = Union[str, Path]

# Column aliases -> canonical column name
COLUMN_ALIASES = {
    'playerid': 'player_id',
    'player': 'player_id',
    'gameid': 'game_id',
    'game': 'game_id',
    'game_date': 'date',
    'opponent': 'opponent_team',
    'opp': 'opponent_team',
    'opponentteam': 'opponent_team',
    'hometeam': 'home_team',
    'home': 'home_team',
    'awayteam': 'away_team',
    'away': 'away_team',
    'pos': 'position',
    'team_abbrev': 'team',
    'defensive_rating': 'rating',
    'def_rating': 'rating',
    'drtg': 'rating',
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lower-case headers and resolve aliases."""
    renamed = {}
    for col in df.columns:
        key = str(col).strip().lower().replace(' ', '_')
        compact = key.replace('_', '')
        if key in COLUMN_ALIASES:
            renamed[col] = COLUMN_ALIASES[key]
        elif compact in COLUMN_ALIASES:
            renamed[col] = COLUMN_ALIASES[compact]
        elif key in CATEGORY_ALIASES:
            renamed[col] = CATEGORY_ALIASES[key].value
        elif compact in CATEGORY_ALIASES:
            renamed[col] = CATEGORY_ALIASES[compact].value
        else:
            renamed[col] = key
    return df.rename(columns=renamed)


def load_csv(filepath: PathLike) -> pd.DataFrame:
    """Load a CSV file with normalized column names."""
    path = Path(filepath)
    if not path.exists():
        raise DataLoadError(f"File not found: {filepath}")

    # Read as text so ids keep leading zeros whatever their header says
    df = _normalize_columns(pd.read_csv(path, dtype=str))
    numeric = [c.value for c in CANONICAL_ORDER] + ['rating']
    for col in df.columns:
        if col in numeric:
            try:
                df[col] = pd.to_numeric(df[col])
            except (TypeError, ValueError) as e:
                raise DataLoadError(f"{filepath}: column {col!r} is not numeric: {e}") from e

    logger.info(f"Loaded {len(df)} rows from {filepath}")
    return df


def _require(df: pd.DataFrame, columns: List[str], source: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataLoadError(f"{source} is missing required columns: {missing}")


def stat_lines_from_frame(df: pd.DataFrame, source: str = 'frame') -> List[PlayerGameStatLine]:
    """
    Build stat lines from a frame.

    Required columns: player_id, game_id, date. Category columns that are
    absent count as zero; blank cells count as zero.
    """
    df = _normalize_columns(df)
    _require(df, ['player_id', 'game_id', 'date'], source)

    categories = [c for c in CANONICAL_ORDER if c.value in df.columns]
    dates = pd.to_datetime(df['date'], errors='coerce')

    lines = []
    seen = set()
    for idx, row in df.iterrows():
        if pd.isna(dates[idx]):
            raise DataLoadError(f"{source} row {idx}: invalid date {row['date']!r}")

        stats = {c: (0.0 if pd.isna(row[c.value]) else row[c.value]) for c in categories}
        opponent = row.get('opponent_team')
        try:
            line = PlayerGameStatLine(
                player_id=str(row['player_id']),
                game_id=str(row['game_id']),
                date=dates[idx].date(),
                opponent_team=None if pd.isna(opponent) else str(opponent),
                stats=stats,
            )
        except ValueError as e:
            raise DataLoadError(f"{source} row {idx}: {e}") from e

        if line.key in seen:
            raise DataLoadError(f"{source} row {idx}: duplicate stat line for {line.key}")
        seen.add(line.key)
        lines.append(line)

    return lines


def load_stat_lines(filepath: PathLike) -> List[PlayerGameStatLine]:
    """Load per-game stat lines from CSV."""
    lines = stat_lines_from_frame(load_csv(filepath), source=str(filepath))
    logger.info(f"Built {len(lines)} stat lines from {filepath}")
    return lines


def load_players(filepath: PathLike) -> List[Player]:
    """Load players (player_id, name, team, position) from CSV."""
    df = load_csv(filepath)
    _require(df, ['player_id', 'team'], str(filepath))

    players = []
    for idx, row in df.iterrows():
        position = None
        raw_position = row.get('position')
        if raw_position is not None and not pd.isna(raw_position):
            try:
                position = Position.parse(raw_position)
            except ValueError:
                logger.warning(f"Unknown position {raw_position!r} for player {row['player_id']}")

        name = row.get('name')
        players.append(Player(
            player_id=str(row['player_id']),
            name=str(row['player_id']) if name is None or pd.isna(name) else str(name),
            team=str(row['team']),
            position=position,
        ))

    return players


def load_schedule(filepath: PathLike) -> List[ScheduledGame]:
    """Load games (game_id, date, home_team, away_team) from CSV."""
    df = load_csv(filepath)
    _require(df, ['game_id', 'date', 'home_team', 'away_team'], str(filepath))

    dates = pd.to_datetime(df['date'], errors='coerce')
    games = []
    for idx, row in df.iterrows():
        if pd.isna(dates[idx]):
            raise DataLoadError(f"{filepath} row {idx}: invalid date {row['date']!r}")
        games.append(ScheduledGame(
            game_id=str(row['game_id']),
            date=dates[idx].date(),
            home_team=str(row['home_team']),
            away_team=str(row['away_team']),
        ))
    return games


def load_defensive_ratings(filepath: PathLike) -> Dict[str, float]:
    """Load team -> defensive rating from CSV (team, rating)."""
    df = load_csv(filepath)
    _require(df, ['team', 'rating'], str(filepath))

    ratings = {}
    for idx, row in df.iterrows():
        if pd.isna(row['rating']):
            logger.warning(f"No defensive rating for {row['team']}, skipping")
            continue
        ratings[str(row['team'])] = float(row['rating'])
    return ratings


def load_scoring_configs(filepath: PathLike) -> List[ScoringConfiguration]:
    """Load scoring configurations from a JSON list (or a single object)."""
    path = Path(filepath)
    if not path.exists():
        raise DataLoadError(f"File not found: {filepath}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON in {filepath}: {e}") from e

    records = data if isinstance(data, list) else [data]
    configs = []
    for i, record in enumerate(records):
        try:
            configs.append(ScoringConfiguration.from_mapping(record))
        except (KeyError, ValueError) as e:
            raise DataLoadError(f"{filepath} entry {i}: {e}") from e

    logger.info(f"Loaded {len(configs)} scoring configurations from {filepath}")
    return configs


def frame_from_stat_lines(lines: List[PlayerGameStatLine]) -> pd.DataFrame:
    """Flatten stat lines back to a frame (one column per category)."""
    rows = []
    for line in lines:
        row = {
            'player_id': line.player_id,
            'game_id': line.game_id,
            'date': line.date,
            'opponent_team': line.opponent_team,
        }
        for category in StatCategory:
            row[category.value] = line.stats[category]
        rows.append(row)
    return pd.DataFrame(rows, columns=['player_id', 'game_id', 'date', 'opponent_team'] +
                        [c.value for c in CANONICAL_ORDER])
