"""Request-scoped orchestration: both snapshots in parallel, then scoring."""

import asyncio
import logging
from datetime import datetime, timezone

from heliotrends.schemas.correlation import CorrelationResult
from heliotrends.schemas.solar import SolarSnapshot
from heliotrends.schemas.trending import TrendingSnapshot
from heliotrends.services import correlation_engine
from heliotrends.services.correlation_engine import JitterSource
from heliotrends.services.solar_data import fetch_solar_snapshot
from heliotrends.services.trending_data import fetch_trending_snapshot

logger = logging.getLogger(__name__)


async def aggregate(
    jitter: JitterSource | None = None,
    now: datetime | None = None,
) -> tuple[SolarSnapshot, TrendingSnapshot, CorrelationResult]:
    now = now or datetime.now(timezone.utc)
    solar, trending = await asyncio.gather(
        fetch_solar_snapshot(now),
        fetch_trending_snapshot(now),
    )
    correlation = correlation_engine.compute(solar, trending, jitter=jitter, now=now)
    logger.info(
        "Aggregated dashboard: Kp=%.1f, trending=%.1f, r=%.3f (%s)",
        solar.kp_index, trending.aggregated_score,
        correlation.coefficient, correlation.strength.value,
    )
    return solar, trending, correlation
