from unittest.mock import AsyncMock, patch

import httpx
import pytest

from heliotrends.config import settings


class FixedJitter:
    """Stands in for random.Random: every draw returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value
        self.calls = 0

    def uniform(self, a: float, b: float) -> float:
        self.calls += 1
        return max(a, min(b, self.value))


@pytest.fixture
def offline(monkeypatch):
    """Every upstream request fails, so each feed serves its mock payload."""
    monkeypatch.setattr(settings, "tmdb_api_key", "")
    monkeypatch.setattr(settings, "tmdb_bearer_token", "")
    with patch(
        "heliotrends.services.upstream.fetch_json",
        AsyncMock(side_effect=httpx.ConnectError("offline")),
    ) as failing:
        yield failing


@pytest.fixture
def fixed_jitter():
    return FixedJitter
