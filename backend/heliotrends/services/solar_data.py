"""Builds a SolarSnapshot from the NOAA and DONKI feeds."""

import asyncio
import logging
from datetime import datetime, timezone

from heliotrends.schemas.solar import CMEEvent, FlareEvent, SolarSnapshot, SolarWind
from heliotrends.services import donki_client, noaa_client

logger = logging.getLogger(__name__)

_DEFAULT_WIND_SPEED = 400.0
_DEFAULT_WIND_DENSITY = 5.0
_DEFAULT_WIND_TEMPERATURE = 100000.0


async def fetch_solar_snapshot(now: datetime | None = None) -> SolarSnapshot:
    """Fetch all four solar feeds concurrently and normalize them."""
    now = now or datetime.now(timezone.utc)
    kp_rows, wind_rows, flare_rows, cme_rows = await asyncio.gather(
        noaa_client.fetch_kp_index(now),
        noaa_client.fetch_solar_wind(now),
        donki_client.fetch_solar_flares(now),
        donki_client.fetch_cme_events(now),
    )
    return build_solar_snapshot(kp_rows, wind_rows, flare_rows, cme_rows, now=now)


def build_solar_snapshot(
    kp_rows: list[dict],
    wind_rows: list[dict],
    flare_rows: list[dict],
    cme_rows: list[dict],
    now: datetime | None = None,
) -> SolarSnapshot:
    current_kp = kp_rows[-1] if kp_rows else {}
    current_wind = wind_rows[-1] if wind_rows else {}

    snapshot = SolarSnapshot(
        kp_index=_kp(current_kp.get("kp_index")),
        estimated_kp=_kp(current_kp.get("estimated_kp")),
        solar_flares=[_flare(f) for f in flare_rows],
        cme_events=[_cme(c) for c in cme_rows],
        solar_wind=SolarWind(
            speed_km_s=_float(current_wind.get("speed")) or _DEFAULT_WIND_SPEED,
            density_per_cm3=_float(current_wind.get("density")) or _DEFAULT_WIND_DENSITY,
            temperature_k=_float(current_wind.get("temperature")) or _DEFAULT_WIND_TEMPERATURE,
        ),
        last_update=now or datetime.now(timezone.utc),
    )
    logger.debug(
        "Solar snapshot: Kp=%.1f (%s), %d flares, %d CMEs",
        snapshot.kp_index, snapshot.activity_level.value,
        len(snapshot.solar_flares), len(snapshot.cme_events),
    )
    return snapshot


def _flare(row: dict) -> FlareEvent:
    return FlareEvent(
        id=str(row.get("flrID", "")),
        class_type=row.get("classType") or "",
        peak_time=row.get("peakTime"),
    )


def _cme(row: dict) -> CMEEvent:
    return CMEEvent(
        id=str(row.get("cmeID", "")),
        start_time=row.get("startTime"),
        speed_km_s=_float(row.get("speed")),
        direction=row.get("sourceLocation") or "",
    )


def _float(value) -> float:
    """NOAA serves some numbers as strings and DONKI leaves gaps as null."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _kp(value) -> float:
    return max(0.0, min(9.0, _float(value)))
