import logging

from fastapi import APIRouter, Response

from heliotrends.config import settings
from heliotrends.routers.responses import cache_control, error_response
from heliotrends.schemas.solar import SolarSnapshot
from heliotrends.services.solar_data import fetch_solar_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["solar"])


@router.get("/solar-data", response_model=SolarSnapshot)
async def get_solar_data(response: Response):
    """Current Kp index, flares, CMEs and solar wind. Falls back to mock feeds."""
    try:
        snapshot = await fetch_solar_snapshot()
    except Exception as e:
        logger.error("Solar data API error: %s", e)
        return error_response("Failed to fetch solar data", e)

    response.headers["Cache-Control"] = cache_control(settings.solar_cache_max_age)
    return snapshot
