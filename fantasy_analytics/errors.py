"""Typed errors raised by the analytics core."""


class AnalyticsError(Exception):
    """Base class for every failure scoped to a single computation."""


class InvalidConfiguration(AnalyticsError, ValueError):
    """Scoring configuration has a missing, unknown or non-finite multiplier."""


class InvalidTradeProposal(AnalyticsError, ValueError):
    """Trade sides are empty, overlap, or reference a player with no value."""


class NoGamesOnDate(AnalyticsError):
    """No games are scheduled league-wide on the requested date."""

    def __init__(self, target_date):
        self.target_date = target_date
        super().__init__(f"No games scheduled on {target_date}")


class DataLoadError(AnalyticsError):
    """An input file or row could not be turned into domain objects."""
