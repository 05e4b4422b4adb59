import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heliotrends.config import settings
from heliotrends.services.dashboard_state import DashboardState
from heliotrends.services.notifications import register_default_hooks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.sync_enabled:
        yield
        return

    from heliotrends.tasks.scheduler import start_scheduler, stop_scheduler
    start_scheduler(app.state.dashboard)
    # Populate the live dashboard without waiting for the first interval
    initial = asyncio.create_task(_initial_sync(app.state.dashboard))
    yield
    initial.cancel()
    stop_scheduler()


async def _initial_sync(state: DashboardState):
    try:
        from heliotrends.services.dashboard_sync import sync_dashboard
        await sync_dashboard(state)
    except Exception as e:
        logger.error("Initial dashboard sync failed: %s", e)


def create_dashboard_state() -> DashboardState:
    state = DashboardState(
        notification_limit=settings.notification_limit,
        history_limit=settings.history_limit,
        history_window=settings.history_window,
    )
    register_default_hooks(state)
    return state


app = FastAPI(
    title="HelioTrends",
    description="Space weather vs. streaming trends correlation dashboard",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.dashboard = create_dashboard_state()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from heliotrends.routers import correlations, dashboard, notifications, solar, trending  # noqa: E402

app.include_router(solar.router, prefix="/api/v1")
app.include_router(trending.router, prefix="/api/v1")
app.include_router(correlations.router, prefix="/api/v1")
app.include_router(dashboard.router, prefix="/api/v1")
app.include_router(notifications.router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/v1/admin/sync")
async def trigger_sync():
    """Manually refresh the live dashboard state."""
    from heliotrends.services.dashboard_sync import sync_dashboard
    await sync_dashboard(app.state.dashboard)
    return {"status": "sync_complete"}
