"""Ingestion layer for MLB Stats API schedule data.

Provides:
- ScheduleClient: One-shot schedule fetch with flattened game list
- ScheduleFetchError: The single fetch failure kind
- AppConfig: Configuration models loaded from YAML
"""

from .client import MLBScheduleError, ScheduleClient, ScheduleFetchError
from .config import AppConfig, DisplayConfig, SourceConfig, TeamConfig, load_config

__all__ = [
    "ScheduleClient",
    "MLBScheduleError",
    "ScheduleFetchError",
    "AppConfig",
    "DisplayConfig",
    "SourceConfig",
    "TeamConfig",
    "load_config",
]
