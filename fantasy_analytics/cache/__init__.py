"""Memoization for analytics results."""

from .memo import SingleFlightMemo, canonical_key

__all__ = ['SingleFlightMemo', 'canonical_key']
