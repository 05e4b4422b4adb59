from datetime import datetime

from heliotrends.schemas.base import CamelModel
from heliotrends.schemas.correlation import CorrelationResult, HistoryPoint
from heliotrends.schemas.enums import NotificationType
from heliotrends.schemas.solar import SolarSnapshot
from heliotrends.schemas.trending import TrendingSnapshot


class DashboardResponse(CamelModel):
    as_of: datetime
    poll_interval_seconds: int = 300
    solar_data: SolarSnapshot
    netflix_data: TrendingSnapshot
    correlation_data: CorrelationResult


class LiveDashboardResponse(CamelModel):
    last_sync_time: datetime | None = None
    poll_interval_seconds: int = 300
    solar_data: SolarSnapshot | None = None
    netflix_data: TrendingSnapshot | None = None
    correlation_data: CorrelationResult | None = None
    unread_count: int = 0


class Notification(CamelModel):
    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    auto_hide: bool = True


class NotificationFeed(CamelModel):
    unread_count: int = 0
    notifications: list[Notification] = []


class HistoryResponse(CamelModel):
    points: list[HistoryPoint] = []
