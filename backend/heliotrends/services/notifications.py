"""Post-update hooks that turn dashboard state changes into notifications."""

from heliotrends.schemas.enums import ActivityLevel, NotificationType
from heliotrends.services.dashboard_state import DashboardState, StateChange

STORM_LEVELS = (ActivityLevel.HIGH, ActivityLevel.EXTREME)
STRONG_CORRELATION = 0.7


def solar_storm_alert(change: StateChange, state: DashboardState):
    """Fires when activity crosses into HIGH/EXTREME, not while it stays there."""
    if change.kind != "solar":
        return
    current = change.current.activity_level
    previous = change.previous.activity_level if change.previous else None
    if current in STORM_LEVELS and previous not in STORM_LEVELS:
        state.add_notification(
            NotificationType.WARNING,
            "Solar Storm Alert",
            f"{current.value.lower()} geomagnetic activity detected (Kp: {change.current.kp_index:g})",
            auto_hide=False,
        )


def new_solar_flares(change: StateChange, state: DashboardState):
    if change.kind != "solar":
        return
    seen = {f.id for f in change.previous.solar_flares} if change.previous else set()
    for flare in change.current.solar_flares:
        if flare.id not in seen:
            state.add_notification(
                NotificationType.INFO,
                "New Solar Flare",
                f"{flare.class_type} class flare detected at {flare.peak_time or 'unknown time'}",
            )


def trending_leader_change(change: StateChange, state: DashboardState):
    if change.kind != "trending" or change.previous is None:
        return
    previous_top = _top_title(change.previous)
    current_top = _top_title(change.current)
    if current_top and previous_top != current_top:
        state.add_notification(
            NotificationType.SUCCESS,
            "New Trending Leader",
            f'"{current_top}" is now the top trending content',
        )


def genre_shift(change: StateChange, state: DashboardState):
    if change.kind != "trending" or change.previous is None or not change.current.top_genres:
        return
    previous_genre = change.previous.top_genres[0].name if change.previous.top_genres else None
    current_genre = change.current.top_genres[0].name
    if previous_genre != current_genre:
        state.add_notification(
            NotificationType.INFO,
            "Genre Shift Detected",
            f"{current_genre} is now the most popular genre",
        )


def correlation_alerts(change: StateChange, state: DashboardState):
    if change.kind != "correlation":
        return
    result = change.current
    for anomaly in result.anomalies:
        state.add_notification(
            NotificationType.WARNING, "Anomaly Detected", anomaly.description, auto_hide=False,
        )
    if abs(result.coefficient) > STRONG_CORRELATION:
        state.add_notification(
            NotificationType.SUCCESS,
            "Strong Correlation Found",
            f"{result.strength.value.lower()} correlation detected (r={result.coefficient:.3f})",
        )


DEFAULT_HOOKS = (
    solar_storm_alert,
    new_solar_flares,
    trending_leader_change,
    genre_shift,
    correlation_alerts,
)


def register_default_hooks(state: DashboardState):
    for hook in DEFAULT_HOOKS:
        state.subscribe(hook)


def _top_title(snapshot) -> str | None:
    movie_title = snapshot.trending_movies[0].title if snapshot.trending_movies else None
    show_name = snapshot.trending_tv[0].name if snapshot.trending_tv else None
    return movie_title or show_name
