"""NASA DONKI client: solar flares (FLR) and coronal mass ejections (CME)."""

from datetime import datetime, timedelta, timezone

from heliotrends.config import settings
from heliotrends.services import upstream


def _window(now: datetime) -> dict:
    start = now - timedelta(days=settings.donki_lookback_days)
    return {
        "startDate": start.strftime("%Y-%m-%d"),
        "endDate": now.strftime("%Y-%m-%d"),
        "api_key": settings.nasa_api_key,
    }


async def fetch_solar_flares(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return await upstream.fetch_or_fallback(
        "DONKI solar flares",
        f"{settings.nasa_base_url}/FLR",
        lambda: mock_solar_flares(now),
        params=_window(now),
        validate=upstream.require_array,
    )


async def fetch_cme_events(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return await upstream.fetch_or_fallback(
        "DONKI CME",
        f"{settings.nasa_base_url}/CME",
        lambda: mock_cme_events(now),
        params=_window(now),
        validate=upstream.require_array,
    )


def _donki_time(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%dT%H:%MZ")


def mock_solar_flares(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return [{
        "flrID": "mock-flr-001",
        "beginTime": _donki_time(now - timedelta(hours=2)),
        "peakTime": _donki_time(now - timedelta(hours=1, minutes=30)),
        "endTime": _donki_time(now - timedelta(hours=1)),
        "classType": "M2.1",
        "sourceLocation": "S15W30",
        "activeRegionNum": 3234,
    }]


def mock_cme_events(now: datetime | None = None) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    return [{
        "cmeID": "mock-cme-001",
        "startTime": _donki_time(now - timedelta(hours=6)),
        "sourceLocation": "S15W30",
        "note": "Mock CME event for development",
        "speed": 450,
        "type": "C",
    }]
