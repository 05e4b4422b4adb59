"""Live dashboard state shared between the sync job and the API.

One ``DashboardState`` is owned by the application and handed to routes via
a dependency. Updates go through ``set_solar`` / ``set_trending`` /
``set_correlation``; each publishes a ``StateChange`` to subscribers after
the new value is stored. Notification rules subscribe as ordinary listeners
(see ``notifications.register_default_hooks``).
"""

import logging
import statistics
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from heliotrends.schemas.correlation import CorrelationResult, HistoryPoint
from heliotrends.schemas.dashboard import Notification
from heliotrends.schemas.enums import NotificationType
from heliotrends.schemas.solar import SolarSnapshot
from heliotrends.schemas.trending import TrendingSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChange:
    kind: str  # solar, trending, correlation
    previous: Any
    current: Any


Listener = Callable[[StateChange, "DashboardState"], None]


class DashboardState:
    def __init__(self, notification_limit: int = 50, history_limit: int = 90, history_window: int = 7):
        self.notification_limit = notification_limit
        self.history_limit = history_limit
        self.history_window = history_window

        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

        self.solar: SolarSnapshot | None = None
        self.trending: TrendingSnapshot | None = None
        self.correlation: CorrelationResult | None = None
        self.last_sync_time: datetime | None = None
        self._notifications: list[Notification] = []
        self._history: list[HistoryPoint] = []

    # --- pub/sub ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, change: StateChange):
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(change, self)
            except Exception as e:
                logger.error(
                    "State listener %s failed on %s update: %s",
                    getattr(listener, "__name__", listener), change.kind, e,
                )

    # --- updates ---

    def set_solar(self, snapshot: SolarSnapshot):
        with self._lock:
            previous, self.solar = self.solar, snapshot
        self._publish(StateChange("solar", previous, snapshot))

    def set_trending(self, snapshot: TrendingSnapshot):
        with self._lock:
            previous, self.trending = self.trending, snapshot
        self._publish(StateChange("trending", previous, snapshot))

    def set_correlation(self, result: CorrelationResult):
        with self._lock:
            previous, self.correlation = self.correlation, result
        self._publish(StateChange("correlation", previous, result))

    def mark_synced(self, when: datetime | None = None):
        with self._lock:
            self.last_sync_time = when or datetime.now(timezone.utc)

    # --- notifications ---

    def add_notification(
        self,
        type: NotificationType,
        title: str,
        message: str,
        auto_hide: bool = True,
    ) -> Notification:
        notification = Notification(
            id=uuid.uuid4().hex,
            type=type,
            title=title,
            message=message,
            timestamp=datetime.now(timezone.utc),
            auto_hide=auto_hide,
        )
        with self._lock:
            self._notifications.insert(0, notification)
            del self._notifications[self.notification_limit:]
        logger.info("Notification [%s] %s: %s", type.value, title, message)
        return notification

    @property
    def notifications(self) -> list[Notification]:
        with self._lock:
            return list(self._notifications)

    @property
    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._notifications if not n.read)

    def mark_notification_read(self, notification_id: str) -> bool:
        with self._lock:
            for i, n in enumerate(self._notifications):
                if n.id == notification_id:
                    self._notifications[i] = n.model_copy(update={"read": True})
                    return True
        return False

    def clear_notifications(self):
        with self._lock:
            self._notifications.clear()

    # --- history ---

    @property
    def history(self) -> list[HistoryPoint]:
        with self._lock:
            return list(self._history)

    def record_history(self, solar_score: float, trending_score: float, when: datetime | None = None):
        """Add or replace the sample for ``when``'s UTC date and refresh the
        rolling correlation of every sample.
        """
        day = (when or datetime.now(timezone.utc)).astimezone(timezone.utc).date()
        with self._lock:
            self._history = [p for p in self._history if p.sample_date != day]
            self._history.append(HistoryPoint(
                sample_date=day, solar_score=solar_score, trending_score=trending_score,
            ))
            self._history.sort(key=lambda p: p.sample_date)
            del self._history[:-self.history_limit]
            self._history = _with_rolling_correlation(self._history, self.history_window)


def _with_rolling_correlation(points: list[HistoryPoint], window: int) -> list[HistoryPoint]:
    solar = [p.solar_score for p in points]
    trending = [p.trending_score for p in points]
    result = []
    for i, point in enumerate(points):
        start = max(0, i - window + 1)
        r = pearson(solar[start:i + 1], trending[start:i + 1])
        result.append(point.model_copy(update={"correlation": r}))
    return result


def pearson(x: list[float], y: list[float]) -> float:
    """Pearson r, or 0.0 when it is undefined (short or constant series)."""
    if len(x) != len(y) or len(x) < 2:
        return 0.0
    try:
        return statistics.correlation(x, y)
    except statistics.StatisticsError:
        return 0.0
