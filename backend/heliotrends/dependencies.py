from fastapi import Request

from heliotrends.config import settings
from heliotrends.services.correlation_engine import JitterSource, make_jitter_source
from heliotrends.services.dashboard_state import DashboardState


def get_jitter() -> JitterSource:
    """Per-request jitter source; unseeded unless CORRELATION_SEED is set."""
    return make_jitter_source(settings.correlation_seed)


def get_dashboard_state(request: Request) -> DashboardState:
    return request.app.state.dashboard
