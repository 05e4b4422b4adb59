from fastapi import APIRouter, Depends, HTTPException

from heliotrends.dependencies import get_dashboard_state
from heliotrends.schemas.dashboard import NotificationFeed
from heliotrends.services.dashboard_state import DashboardState

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationFeed)
async def list_notifications(state: DashboardState = Depends(get_dashboard_state)):
    return NotificationFeed(unread_count=state.unread_count, notifications=state.notifications)


@router.post("/{notification_id}/read", response_model=NotificationFeed)
async def mark_read(notification_id: str, state: DashboardState = Depends(get_dashboard_state)):
    if not state.mark_notification_read(notification_id):
        raise HTTPException(status_code=404, detail=f"Notification {notification_id} not found")
    return NotificationFeed(unread_count=state.unread_count, notifications=state.notifications)


@router.delete("")
async def clear_notifications(state: DashboardState = Depends(get_dashboard_state)):
    state.clear_notifications()
    return {"status": "ok"}
