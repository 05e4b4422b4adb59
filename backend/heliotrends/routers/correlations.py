import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from heliotrends.config import settings
from heliotrends.dependencies import get_dashboard_state, get_jitter
from heliotrends.routers.responses import cache_control, error_response
from heliotrends.schemas.correlation import CorrelationResult
from heliotrends.schemas.dashboard import HistoryResponse
from heliotrends.schemas.solar import SolarSnapshot
from heliotrends.schemas.trending import TrendingSnapshot
from heliotrends.services import correlation_engine
from heliotrends.services.correlation_engine import JitterSource
from heliotrends.services.dashboard_state import DashboardState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/correlations", tags=["correlations"])


@router.post("", response_model=CorrelationResult)
async def calculate_correlations(
    request: Request,
    response: Response,
    jitter: JitterSource = Depends(get_jitter),
):
    """Score a ``{solarData, netflixData}`` pair supplied by the client."""
    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict) or not body.get("solarData") or not body.get("netflixData"):
        return JSONResponse(status_code=400, content={"error": "Missing solar or Netflix data"})

    try:
        solar = SolarSnapshot.model_validate(body["solarData"])
        trending = TrendingSnapshot.model_validate(body["netflixData"])
    except ValidationError as e:
        return error_response("Invalid solar or Netflix data", e, status_code=400)

    try:
        result = correlation_engine.compute(solar, trending, jitter=jitter)
    except Exception as e:
        logger.error("Correlation API error: %s", e)
        return error_response("Failed to calculate correlations", e)

    response.headers["Cache-Control"] = cache_control(settings.correlation_cache_max_age)
    return result


@router.get("/history", response_model=HistoryResponse)
async def correlation_history(
    limit: int = Query(30, ge=1, le=365),
    state: DashboardState = Depends(get_dashboard_state),
):
    """Rolling correlation samples recorded by the background sync."""
    return HistoryResponse(points=state.history[-limit:])
