"""APScheduler setup for the periodic dashboard sync."""

import asyncio
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from heliotrends.config import settings
from heliotrends.services.dashboard_state import DashboardState

logger = logging.getLogger(__name__)

_scheduler: BackgroundScheduler | None = None


def _run_dashboard_sync(state: DashboardState):
    from heliotrends.services.dashboard_sync import sync_dashboard
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(sync_dashboard(state))
    except Exception as e:
        logger.error("Dashboard sync job failed: %s", e)
    finally:
        loop.close()


def start_scheduler(state: DashboardState):
    global _scheduler
    _scheduler = BackgroundScheduler()

    _scheduler.add_job(
        _run_dashboard_sync,
        "interval",
        minutes=settings.sync_interval_minutes,
        args=[state],
        id="dashboard_sync",
        name="Solar + trending dashboard sync",
        max_instances=1,
    )

    _scheduler.start()
    logger.info("Scheduler started: dashboard sync every %d min", settings.sync_interval_minutes)


def stop_scheduler():
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
        _scheduler = None
