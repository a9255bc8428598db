"""Application configuration models using Pydantic."""

from datetime import date
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from ..constants import MLB_API_BASE_URL, MLB_SPORT_ID, SEASON_START_DATE, TAMPA_BAY_RAYS_ID
from .template import resolve_config


class TeamConfig(BaseModel):
    """The tracked team and its season boundary."""

    team_id: int = Field(default=TAMPA_BAY_RAYS_ID, ge=1, description="MLB team ID")
    name: str = Field(default="Tampa Bay Rays", description="Display name")
    season_start_date: date = Field(
        default=date.fromisoformat(SEASON_START_DATE),
        description="Games before this date (spring training) are dropped",
    )


class SourceConfig(BaseModel):
    """MLB Stats API source configuration."""

    base_url: str = Field(default=MLB_API_BASE_URL, description="Stats API base URL")
    sport_id: int = Field(default=MLB_SPORT_ID, ge=1, description="1 = MLB")
    hydrate: str = Field(
        default="probablePitcher,stats",
        description="Hydration directive for schedule sub-resources",
    )
    timeout: float = Field(default=30.0, gt=0, le=300, description="Request timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class DisplayConfig(BaseModel):
    """How rows are rendered."""

    timezone: str = Field(
        default="America/New_York",
        description="Timezone used to render game dates as MM/DD",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject names the tz database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""

    team: TeamConfig = Field(default_factory=TeamConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    # Last schedule date to request; None means today
    end_date: Optional[date] = None

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: Optional[date], info: ValidationInfo) -> Optional[date]:
        """End date may not precede the season start."""
        team = info.data.get("team")
        if v is not None and team is not None and v < team.season_start_date:
            raise ValueError("end_date must not be before team.season_start_date")
        return v


def load_config(path: str | Path | None = None, **template_vars) -> AppConfig:
    """Load application configuration from a YAML file.

    Args:
        path: Path to YAML configuration file (None for defaults)
        **template_vars: Extra variables for ${VAR} substitution

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid or references an unknown variable
    """
    if path is None:
        return AppConfig()

    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path) as f:
        config_data = yaml.safe_load(f) or {}

    config_data = resolve_config(config_data, **template_vars)

    return AppConfig(**config_data)
