"""Data loading modules."""

from .loaders import (
    load_csv,
    load_stat_lines,
    load_players,
    load_schedule,
    load_defensive_ratings,
    load_scoring_configs,
    stat_lines_from_frame,
    frame_from_stat_lines,
)

__all__ = [
    "load_csv",
    "load_stat_lines",
    "load_players",
    "load_schedule",
    "load_defensive_ratings",
    "load_scoring_configs",
    "stat_lines_from_frame",
    "frame_from_stat_lines",
]
