"""MLB Stats API schedule client.

Usage:
    >>> from mlb_team_pitching.ingestion import ScheduleClient
    >>>
    >>> with ScheduleClient() as client:
    ...     games = client.fetch_schedule(139, "2025-03-28", "2025-04-30")
    >>> print(f"Fetched {len(games)} games")
"""

import logging
from datetime import date
from typing import Any

import httpx

from .config import SourceConfig

logger = logging.getLogger(__name__)


class MLBScheduleError(Exception):
    """Base error for schedule ingestion."""


class ScheduleFetchError(MLBScheduleError):
    """The schedule could not be fetched.

    Raised for transport errors, non-success statuses and malformed bodies
    alike; the cause is logged and chained but callers treat them the same.
    """

    def __init__(self, message: str = "Failed to fetch MLB schedule"):
        super().__init__(message)


class ScheduleClient:
    """Thin wrapper around httpx for the Stats API schedule endpoint."""

    def __init__(
        self,
        config: SourceConfig | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize schedule client.

        Args:
            config: Source configuration (uses defaults if None)
            client: Pre-built httpx client; owned and closed by the caller
        """
        self.config = config or SourceConfig()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.config.timeout)

    def close(self) -> None:
        """Close HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def schedule_url(self) -> str:
        return f"{self.config.base_url}/schedule"

    def build_params(
        self,
        team_id: int,
        start_date: str | date,
        end_date: str | date,
    ) -> dict[str, Any]:
        """Build schedule query parameters."""
        return {
            "sportId": self.config.sport_id,
            "teamId": team_id,
            "hydrate": self.config.hydrate,
            "startDate": _iso(start_date),
            "endDate": _iso(end_date),
        }

    def fetch_schedule(
        self,
        team_id: int,
        start_date: str | date,
        end_date: str | date,
    ) -> list[dict[str, Any]]:
        """Fetch a team's games between two dates (inclusive).

        Args:
            team_id: MLB team ID
            start_date: First schedule date (YYYY-MM-DD or date)
            end_date: Last schedule date (YYYY-MM-DD or date)

        Returns:
            Raw game dicts from every ``dates[].games[]`` entry, in order

        Raises:
            ScheduleFetchError: On transport errors, non-2xx responses,
                or a body that isn't a schedule document
        """
        params = self.build_params(team_id, start_date, end_date)
        logger.info(f"Fetching schedule: {self.schedule_url} (params={params})")

        try:
            response = self._client.get(self.schedule_url, params=params)
            response.raise_for_status()
            data = response.json()
            games = [game for entry in data["dates"] for game in entry["games"]]
        except httpx.HTTPStatusError as e:
            logger.error(f"Schedule API responded with status: {e.response.status_code}")
            raise ScheduleFetchError() from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching schedule: {e}")
            raise ScheduleFetchError() from e
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed schedule response: {e!r}")
            raise ScheduleFetchError() from e

        logger.info(f"Fetched {len(games)} games for team {team_id}")
        return games


def _iso(value: str | date) -> str:
    return value.isoformat() if isinstance(value, date) else value
