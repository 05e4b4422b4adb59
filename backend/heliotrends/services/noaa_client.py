"""NOAA SWPC client: planetary Kp index and solar wind."""

from datetime import datetime, timezone

from heliotrends.config import settings
from heliotrends.services import upstream


async def fetch_kp_index(now: datetime | None = None) -> list[dict]:
    """Kp readings, oldest first. The last entry is the current value."""
    return await upstream.fetch_or_fallback(
        "NOAA Kp-index",
        f"{settings.noaa_base_url}/planetary_k_index_1m.json",
        lambda: mock_kp_index(now),
        validate=upstream.require_list,
    )


async def fetch_solar_wind(now: datetime | None = None) -> list[dict]:
    """Solar wind plasma readings, oldest first."""
    return await upstream.fetch_or_fallback(
        "NOAA solar wind",
        f"{settings.noaa_base_url}/solar-wind/solar-wind-speed-1-day.json",
        lambda: mock_solar_wind(now),
        validate=upstream.require_list,
    )


def mock_kp_index(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return [{
        "time_tag": now.isoformat(),
        "kp_index": 3.2,
        "estimated_kp": 3.1,
        "kp": "3+",
    }]


def mock_solar_wind(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return [{
        "time_tag": now.isoformat(),
        "speed": 420,
        "density": 5.2,
        "temperature": 100000,
    }]
