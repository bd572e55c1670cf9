"""Scoring formula."""

from .formula import fantasy_points, score_game, fantasy_point_series, score_frame, chronological

__all__ = ['fantasy_points', 'score_game', 'fantasy_point_series', 'score_frame', 'chronological']
