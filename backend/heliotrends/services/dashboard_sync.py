"""Refreshes the live dashboard state from the upstream feeds."""

import logging
from datetime import datetime, timezone

from heliotrends.services import correlation_engine
from heliotrends.services.aggregator import aggregate
from heliotrends.services.correlation_engine import JitterSource
from heliotrends.services.dashboard_state import DashboardState

logger = logging.getLogger(__name__)


async def sync_dashboard(
    state: DashboardState,
    jitter: JitterSource | None = None,
    now: datetime | None = None,
):
    """Fetch, score and publish one round of data into ``state``."""
    now = now or datetime.now(timezone.utc)
    logger.info("Starting dashboard sync")

    solar, trending, correlation = await aggregate(jitter=jitter, now=now)

    state.set_solar(solar)
    state.set_trending(trending)
    state.set_correlation(correlation)
    state.record_history(
        correlation_engine.solar_activity_score(solar),
        trending.aggregated_score,
        when=now,
    )
    state.mark_synced(now)

    logger.info("Dashboard sync complete (%d unread notifications)", state.unread_count)
