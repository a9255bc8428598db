"""Transformations from raw schedule games to display-ready views.

- GameTransformer: Final/in-season filter and team-relative GameRows
- aggregate_pitchers: Per-pitcher season totals and rate stats
"""

from .games import GameResult, GameRow, GameTransformer, Location
from .pitchers import PitcherSeasonStats, aggregate_pitchers

__all__ = [
    "GameTransformer",
    "GameRow",
    "GameResult",
    "Location",
    "PitcherSeasonStats",
    "aggregate_pitchers",
]
