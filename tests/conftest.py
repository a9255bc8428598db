"""Pytest configuration and fixtures for all tests."""

import json
from datetime import date
from typing import Any, Callable

import httpx
import pytest

from mlb_team_pitching.ingestion.client import ScheduleClient
from mlb_team_pitching.ingestion.config import AppConfig, SourceConfig, TeamConfig

from tests.builders import RAYS_ID


# ============================================================================
# Config Fixtures
# ============================================================================

@pytest.fixture
def app_config() -> AppConfig:
    """Rays 2025 configuration with a fixed end date."""
    return AppConfig(
        team=TeamConfig(team_id=RAYS_ID, season_start_date=date(2025, 3, 28)),
        source=SourceConfig(base_url="https://statsapi.test/api/v1"),
        end_date=date(2025, 4, 30),
    )


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def mock_schedule_client(app_config) -> Callable[..., ScheduleClient]:
    """Factory for a ScheduleClient backed by httpx.MockTransport.

    Every request is recorded on ``client.requests``.
    """
    def _factory(
        payload: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
        exc: Exception | None = None,
    ) -> ScheduleClient:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, content=json.dumps(payload).encode())

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = ScheduleClient(app_config.source, client=http_client)
        client.requests = requests
        return client

    return _factory
