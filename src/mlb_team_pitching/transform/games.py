"""Schedule game → team-relative game row transformation.

Turns raw ``Schedule.schedule`` game records (two-sided home/away) into rows
seen from the tracked team's perspective:

    {gamePk, gameDate, status, teams: {home: {...}, away: {...}}}
        ↓ filter_final_games()   - Final and on/after season start
        ↓ transform_game()       - tracked side, opponent, result, pitcher line
    GameRow(date="04/02", location="vs.", opponent="TEX", result="Win", ...)

Missing data never raises: absent pitchers and stats become ``None`` and are
rendered as "N/A" by ``GameRow.to_display()``.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Iterable
from zoneinfo import ZoneInfo

from ..constants import NOT_AVAILABLE, SEASON_START_DATE, TAMPA_BAY_RAYS_ID, abbreviate_team

logger = logging.getLogger(__name__)

FINAL_STATE = "Final"
PITCHING_GROUP = "pitching"
GAME_LOG_TYPE = "gameLog"


class Location(str, Enum):
    """Where the tracked team played, rendered as its schedule marker."""

    HOME = "vs."
    AWAY = "@"


class GameResult(str, Enum):
    """Outcome for the tracked team."""

    WIN = "Win"
    LOSS = "Loss"
    TIE = "Tie"


@dataclass(frozen=True)
class GameRow:
    """One completed game from the tracked team's perspective."""

    game_pk: int | None
    date: str
    location: Location
    opponent: str
    result: GameResult
    score: str
    pitcher: str | None = None
    innings_pitched: str | float | None = None
    strikeouts: int | None = None
    base_on_balls: int | None = None
    earned_runs: int | None = None

    @property
    def has_pitcher(self) -> bool:
        return bool(self.pitcher)

    def to_display(self) -> dict[str, Any]:
        """Render the row with "N/A" in place of missing values."""
        return {
            "game_pk": self.game_pk,
            "date": self.date,
            "location": self.location.value,
            "opponent": self.opponent,
            "result": self.result.value,
            "score": self.score,
            "pitcher": _display(self.pitcher),
            "innings_pitched": _display(self.innings_pitched),
            "strikeouts": _display(self.strikeouts),
            "base_on_balls": _display(self.base_on_balls),
            "earned_runs": _display(self.earned_runs),
        }


class GameTransformer:
    """Filter and normalize raw schedule games for one tracked team.

    Usage:
        >>> transformer = GameTransformer(team_id=139, season_start=date(2025, 3, 28))
        >>> rows = transformer.transform_games(raw_games)
    """

    def __init__(
        self,
        team_id: int = TAMPA_BAY_RAYS_ID,
        season_start: date | str = SEASON_START_DATE,
        display_timezone: str = "America/New_York",
    ):
        """Initialize transformer.

        Args:
            team_id: MLB team ID of the tracked team
            season_start: Games before this date are dropped
            display_timezone: Timezone used to render MM/DD dates
        """
        if isinstance(season_start, str):
            season_start = date.fromisoformat(season_start)

        self.team_id = team_id
        self.season_start = season_start
        self.display_tz = ZoneInfo(display_timezone)
        # Season start is compared as an instant: midnight UTC
        self._season_start_at = datetime.combine(season_start, time.min, tzinfo=timezone.utc)

    def is_final_in_season(self, game: dict[str, Any]) -> bool:
        """Check if a game is Final and was played on/after season start."""
        status = (game.get("status") or {}).get("detailedState")
        if status != FINAL_STATE:
            return False

        game_datetime = parse_game_datetime(game.get("gameDate"))
        if game_datetime is None:
            logger.debug(f"Game {game.get('gamePk')}: unparseable gameDate, skipping")
            return False

        return game_datetime >= self._season_start_at

    def filter_final_games(self, games: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        """Keep Final, in-season games, preserving input order."""
        return [game for game in games if self.is_final_in_season(game)]

    def transform_game(self, game: dict[str, Any]) -> GameRow:
        """Map one raw game to a GameRow relative to the tracked team."""
        teams = game.get("teams") or {}
        home = teams.get("home") or {}
        away = teams.get("away") or {}

        is_home = (home.get("team") or {}).get("id") == self.team_id
        team, opponent = (home, away) if is_home else (away, home)

        team_score = team.get("score")
        opponent_score = opponent.get("score")
        opponent_name = (opponent.get("team") or {}).get("name") or NOT_AVAILABLE

        probable_pitcher = team.get("probablePitcher")
        stats = find_game_log_stats(probable_pitcher) or {}

        return GameRow(
            game_pk=game.get("gamePk"),
            date=self.format_game_date(game.get("gameDate")),
            location=Location.HOME if is_home else Location.AWAY,
            opponent=abbreviate_team(opponent_name),
            result=determine_result(team_score, opponent_score),
            score=f"{_display(team_score)}-{_display(opponent_score)}",
            pitcher=_mapping(probable_pitcher).get("fullName"),
            innings_pitched=stats.get("inningsPitched"),
            strikeouts=stats.get("strikeOuts"),
            base_on_balls=stats.get("baseOnBalls"),
            earned_runs=stats.get("earnedRuns"),
        )

    def transform_games(self, games: Iterable[dict[str, Any]]) -> list[GameRow]:
        """Filter then normalize a list of raw games."""
        final_games = self.filter_final_games(games)
        logger.debug(f"{len(final_games)} final in-season games for team {self.team_id}")
        return [self.transform_game(game) for game in final_games]

    def format_game_date(self, value: str | None) -> str:
        """Render a game timestamp as MM/DD in the display timezone."""
        game_datetime = parse_game_datetime(value)
        if game_datetime is None:
            return NOT_AVAILABLE
        return game_datetime.astimezone(self.display_tz).strftime("%m/%d")


def find_game_log_stats(pitcher: dict[str, Any] | None) -> dict[str, Any] | None:
    """Find the per-game pitching line among a probable pitcher's stat entries.

    Entries that aren't mappings are skipped.
    """
    if not isinstance(pitcher, dict):
        return None

    for entry in pitcher.get("stats") or []:
        if not isinstance(entry, dict):
            continue
        group = _mapping(entry.get("group")).get("displayName")
        stat_type = _mapping(entry.get("type")).get("displayName")
        if group == PITCHING_GROUP and stat_type == GAME_LOG_TYPE:
            stats = entry.get("stats")
            return stats if isinstance(stats, dict) else None

    return None


def determine_result(team_score: Any, opponent_score: Any) -> GameResult:
    """Compare final scores numerically; anything not strictly ahead or behind is a tie.

    Numeric strings ("5") compare as numbers; missing or unparseable scores tie.
    """
    team_runs = _as_number(team_score)
    opponent_runs = _as_number(opponent_score)
    if team_runs is None or opponent_runs is None:
        return GameResult.TIE
    if team_runs > opponent_runs:
        return GameResult.WIN
    if team_runs < opponent_runs:
        return GameResult.LOSS
    return GameResult.TIE


def parse_game_datetime(value: str | None) -> datetime | None:
    """Parse an API timestamp like '2025-04-02T23:05:00Z' (naive → UTC)."""
    if not value:
        return None
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _display(value: Any) -> Any:
    return NOT_AVAILABLE if value is None else value


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
