from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from heliotrends.config import Settings
from heliotrends.schemas.correlation import Anomaly, CorrelationResult
from heliotrends.schemas.enums import CorrelationStrength, NotificationType
from heliotrends.schemas.solar import FlareEvent, SolarSnapshot
from heliotrends.schemas.trending import GenreStat, TrendingItem, TrendingSnapshot
from heliotrends.services.dashboard_state import DashboardState, pearson
from heliotrends.services.dashboard_sync import sync_dashboard
from heliotrends.services.notifications import register_default_hooks

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def state():
    s = DashboardState(notification_limit=50, history_limit=90, history_window=7)
    register_default_hooks(s)
    return s


def _solar(kp, flare_ids=()):
    return SolarSnapshot(
        kp_index=kp,
        solar_flares=[FlareEvent(id=f, class_type="C1.0", peak_time="2026-03-01T10:00Z") for f in flare_ids],
    )


def _trending(top_title, top_genre="Drama"):
    return TrendingSnapshot(
        trending_movies=[TrendingItem(id=1, title=top_title, popularity=100, genres=[top_genre])],
        top_genres=[GenreStat(name=top_genre, count=1, popularity=100)],
        aggregated_score=100,
    )


def _correlation(coefficient, anomalies=()):
    return CorrelationResult(
        coefficient=coefficient,
        strength=CorrelationStrength.STRONG if abs(coefficient) > 0.7 else CorrelationStrength.WEAK,
        significance=60,
        anomalies=list(anomalies),
    )


def _titles(state):
    return [n.title for n in state.notifications]


# --- notification hooks ---

def test_storm_alert_fires_on_crossing_only(state):
    state.set_solar(_solar(4))
    assert _titles(state) == []

    state.set_solar(_solar(6))
    assert _titles(state) == ["Solar Storm Alert"]
    alert = state.notifications[0]
    assert alert.type == NotificationType.WARNING
    assert alert.auto_hide is False
    assert "high geomagnetic activity" in alert.message

    # HIGH -> EXTREME stays inside storm levels
    state.set_solar(_solar(8))
    assert _titles(state) == ["Solar Storm Alert"]

    state.set_solar(_solar(2))
    state.set_solar(_solar(7))
    assert _titles(state) == ["Solar Storm Alert", "Solar Storm Alert"]
    assert "extreme" in state.notifications[0].message


def test_storm_alert_on_first_snapshot(state):
    state.set_solar(_solar(9))
    assert _titles(state) == ["Solar Storm Alert"]


def test_new_flares_notify_once(state):
    state.set_solar(_solar(1, ["f1"]))
    state.set_solar(_solar(1, ["f1", "f2"]))
    state.set_solar(_solar(1, ["f1", "f2"]))

    assert _titles(state) == ["New Solar Flare", "New Solar Flare"]
    assert state.notifications[0].message.startswith("C1.0 class flare detected")


def test_trending_leader_and_genre_shift(state):
    state.set_trending(_trending("Solar Storm", "Drama"))
    assert _titles(state) == []

    state.set_trending(_trending("Solar Storm", "Drama"))
    assert _titles(state) == []

    state.set_trending(_trending("Aurora", "Science Fiction"))
    assert _titles(state) == ["Genre Shift Detected", "New Trending Leader"]
    assert state.notifications[1].message == '"Aurora" is now the top trending content'
    assert state.notifications[0].message == "Science Fiction is now the most popular genre"


def test_correlation_alerts(state):
    anomaly = Anomaly(timestamp=NOW, type="genre_anomaly", description="sci-fi missing", confidence=0.72)

    state.set_correlation(_correlation(0.2, [anomaly]))
    assert _titles(state) == ["Anomaly Detected"]
    assert state.notifications[0].auto_hide is False

    state.set_correlation(_correlation(-0.75))
    assert _titles(state)[0] == "Strong Correlation Found"
    assert "r=-0.750" in state.notifications[0].message

    state.set_correlation(_correlation(0.7))
    assert len(state.notifications) == 2


# --- feed ---

def test_notification_feed_is_newest_first_and_capped():
    s = DashboardState(notification_limit=3)
    for i in range(5):
        s.add_notification(NotificationType.INFO, f"n{i}", "msg")

    assert _titles(s) == ["n4", "n3", "n2"]
    assert s.unread_count == 3


def test_mark_read_and_clear(state):
    first = state.add_notification(NotificationType.INFO, "a", "msg")
    state.add_notification(NotificationType.ERROR, "b", "msg")

    assert state.mark_notification_read(first.id) is True
    assert state.unread_count == 1
    assert state.notifications[1].read is True
    assert state.mark_notification_read("missing") is False

    state.clear_notifications()
    assert state.notifications == []
    assert state.unread_count == 0


def test_subscribe_and_unsubscribe():
    s = DashboardState()
    seen = []
    unsubscribe = s.subscribe(lambda change, st: seen.append((change.kind, change.previous, change.current)))

    first = _solar(1)
    second = _solar(2)
    s.set_solar(first)
    s.set_solar(second)
    unsubscribe()
    s.set_solar(_solar(3))
    unsubscribe()

    assert seen == [("solar", None, first), ("solar", first, second)]
    assert s.solar.kp_index == 3


def test_listener_sees_stored_value():
    s = DashboardState()
    observed = []
    s.subscribe(lambda change, st: observed.append(st.trending is change.current))

    s.set_trending(_trending("x"))
    assert observed == [True]


# --- history ---

def test_history_replaces_same_day_sample(state):
    state.record_history(10, 20, when=NOW)
    state.record_history(30, 40, when=NOW + timedelta(hours=5))

    history = state.history
    assert len(history) == 1
    assert history[0].solar_score == 30
    assert history[0].sample_date == NOW.date()


def test_history_rolling_correlation(state):
    for day in range(3):
        state.record_history(10 * (day + 1), 100 * (day + 1), when=NOW + timedelta(days=day))

    history = state.history
    assert [p.correlation for p in history[:1]] == [0.0]
    assert history[1].correlation == pytest.approx(1.0)
    assert history[2].correlation == pytest.approx(1.0)


def test_history_window_limits_samples():
    s = DashboardState(history_window=2)
    s.record_history(1, 5, when=NOW)
    s.record_history(2, 4, when=NOW + timedelta(days=1))
    s.record_history(3, 6, when=NOW + timedelta(days=2))

    # window of two: (1,5)->(2,4) falls, (2,4)->(3,6) rises
    assert [p.correlation for p in s.history] == pytest.approx([0.0, -1.0, 1.0])


def test_history_is_capped_and_ordered():
    s = DashboardState(history_limit=5)
    for day in reversed(range(8)):
        s.record_history(day, day, when=NOW + timedelta(days=day))

    dates = [p.sample_date for p in s.history]
    assert len(dates) == 5
    assert dates == sorted(dates)
    assert dates[0] == (NOW + timedelta(days=3)).date()


@pytest.mark.parametrize("x, y", [
    ([], []),
    ([1], [2]),
    ([1, 1, 1], [1, 2, 3]),
    ([1, 2], [1, 2, 3]),
])
def test_pearson_undefined_is_zero(x, y):
    assert pearson(x, y) == 0.0


def test_leader_change_falls_back_to_show_name(state):
    def snapshot(show_name):
        return TrendingSnapshot(
            trending_movies=[TrendingItem(id=1, popularity=10)],
            trending_tv=[TrendingItem(id=101, name=show_name, popularity=20)],
        )

    state.set_trending(snapshot("Space Weather Alert"))
    state.set_trending(snapshot("Solar Flare Chronicles"))

    assert _titles(state) == ["New Trending Leader"]
    assert state.notifications[0].message == '"Solar Flare Chronicles" is now the top trending content'


def test_failing_listener_does_not_stop_later_listeners():
    s = DashboardState()
    seen = []

    def broken(change, st):
        raise RuntimeError("listener bug")

    s.subscribe(broken)
    s.subscribe(lambda change, st: seen.append(change.kind))

    s.set_solar(_solar(1))
    assert seen == ["solar"]
    assert s.solar.kp_index == 1


@pytest.mark.asyncio
async def test_sync_completes_when_listener_raises(state, offline):
    def broken_on_trending(change, st):
        if change.kind == "trending":
            raise RuntimeError("listener bug")

    state.subscribe(broken_on_trending)

    await sync_dashboard(state, now=NOW)

    assert state.solar is not None
    assert state.trending is not None
    assert state.correlation is not None
    assert state.last_sync_time == NOW
    assert len(state.history) == 1
    assert "New Solar Flare" in _titles(state)


@pytest.mark.parametrize("field", ["notification_limit", "history_limit"])
def test_settings_reject_non_positive_limits(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_history_limit_of_one_keeps_latest_sample():
    s = DashboardState(history_limit=1)
    s.record_history(1, 1, when=NOW)
    s.record_history(2, 2, when=NOW + timedelta(days=1))

    assert [p.solar_score for p in s.history] == [2]
