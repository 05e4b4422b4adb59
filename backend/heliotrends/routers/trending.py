import logging

from fastapi import APIRouter, Response

from heliotrends.config import settings
from heliotrends.routers.responses import cache_control, error_response
from heliotrends.schemas.trending import TrendingSnapshot
from heliotrends.services.trending_data import fetch_trending_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["trending"])


@router.get("/netflix-data", response_model=TrendingSnapshot)
async def get_trending_data(response: Response):
    """Trending movies and TV with genre aggregates."""
    try:
        snapshot = await fetch_trending_snapshot()
    except Exception as e:
        logger.error("Trending data API error: %s", e)
        return error_response("Failed to fetch Netflix data", e)

    response.headers["Cache-Control"] = cache_control(settings.trending_cache_max_age)
    return snapshot
