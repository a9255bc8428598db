"""Pipeline orchestration for team season reports.

Architecture:
    Schedule.schedule(teamId, startDate, endDate) → games[]
        ↓
    GameTransformer → GameRow[]
        ↓
    aggregate_pitchers → PitcherSeasonStats[]
"""

from mlb_team_pitching.pipeline.season import SeasonPipeline, SeasonReport

__all__ = [
    "SeasonPipeline",
    "SeasonReport",
]
