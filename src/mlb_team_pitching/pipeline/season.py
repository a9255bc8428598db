"""Season pipeline: fetch → game rows → pitcher season stats.

    ScheduleClient.fetch_schedule(team, start, end) → raw games
        ↓
    GameTransformer.transform_games() → GameRow[]   (per-game display data)
        ↓
    aggregate_pitchers() → PitcherSeasonStats[]

Each run is independent: nothing is cached or carried between runs, and a
fetch failure fails the whole run with no partial report.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..ingestion.client import ScheduleClient
from ..ingestion.config import AppConfig
from ..transform.games import GameRow, GameTransformer
from ..transform.pitchers import PitcherSeasonStats, aggregate_pitchers

logger = logging.getLogger(__name__)


@dataclass
class SeasonReport:
    """Results from one pipeline run."""

    team_id: int
    start_date: date
    end_date: date

    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    games_fetched: int = 0
    rows: list[GameRow] = field(default_factory=list)
    pitchers: list[PitcherSeasonStats] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return (datetime.now() - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Display form: rows carry "N/A" sentinels, stats are plain dicts."""
        return {
            "team_id": self.team_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "games_fetched": self.games_fetched,
            "games": [row.to_display() for row in self.rows],
            "pitchers": [p.to_dict() for p in self.pitchers],
        }


class SeasonPipeline:
    """Runs the fetch/transform/aggregate chain for the configured team.

    Usage:
        >>> config = load_config("config/rays_2025.yaml")
        >>> with ScheduleClient(config.source) as client:
        ...     report = SeasonPipeline(client, config).run()
        >>> print(f"{len(report.rows)} games, {len(report.pitchers)} starters")
    """

    def __init__(self, client: ScheduleClient, config: AppConfig | None = None):
        """Initialize the pipeline.

        Args:
            client: Schedule client used for the single fetch
            config: Application configuration (uses defaults if None)
        """
        self.client = client
        self.config = config or AppConfig()
        self.transformer = GameTransformer(
            team_id=self.config.team.team_id,
            season_start=self.config.team.season_start_date,
            display_timezone=self.config.display.timezone,
        )

    def run(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> SeasonReport:
        """Fetch the schedule and derive game rows and pitcher stats.

        Args:
            start_date: First schedule date (default: season start)
            end_date: Last schedule date (default: config end_date, else today)

        Returns:
            SeasonReport with rows and pitcher stats

        Raises:
            ScheduleFetchError: If the schedule fetch fails
        """
        team_id = self.config.team.team_id
        start_date = start_date or self.config.team.season_start_date
        end_date = end_date or self.config.end_date or date.today()

        logger.info(f"Running season pipeline for team {team_id} ({start_date} to {end_date})")
        report = SeasonReport(team_id=team_id, start_date=start_date, end_date=end_date)

        games = self.client.fetch_schedule(team_id, start_date, end_date)
        report.games_fetched = len(games)

        report.rows = self.transformer.transform_games(games)
        report.pitchers = aggregate_pitchers(report.rows)
        report.finished_at = datetime.now()

        logger.info(
            f"Season pipeline complete: {len(report.rows)} final games, "
            f"{len(report.pitchers)} starting pitchers in {report.duration_seconds:.2f}s"
        )
        return report
