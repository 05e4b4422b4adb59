import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from heliotrends.config import settings
from heliotrends.dependencies import get_dashboard_state, get_jitter
from heliotrends.routers.responses import cache_control, error_response
from heliotrends.schemas.dashboard import DashboardResponse, LiveDashboardResponse
from heliotrends.services.aggregator import aggregate
from heliotrends.services.correlation_engine import JitterSource
from heliotrends.services.dashboard_state import DashboardState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(response: Response, jitter: JitterSource = Depends(get_jitter)):
    """Composite endpoint: fresh solar + trending snapshots and their correlation."""
    try:
        solar, trending, correlation = await aggregate(jitter=jitter)
    except Exception as e:
        logger.error("Dashboard API error: %s", e)
        return error_response("Failed to build dashboard", e)

    response.headers["Cache-Control"] = cache_control(settings.dashboard_cache_max_age)
    return DashboardResponse(
        as_of=datetime.now(timezone.utc),
        poll_interval_seconds=settings.dashboard_poll_interval,
        solar_data=solar,
        netflix_data=trending,
        correlation_data=correlation,
    )


@router.get("/live", response_model=LiveDashboardResponse)
async def get_live_dashboard(state: DashboardState = Depends(get_dashboard_state)):
    """Latest state from the background sync; fields are null before the first sync."""
    return LiveDashboardResponse(
        last_sync_time=state.last_sync_time,
        poll_interval_seconds=settings.dashboard_poll_interval,
        solar_data=state.solar,
        netflix_data=state.trending,
        correlation_data=state.correlation,
        unread_count=state.unread_count,
    )
