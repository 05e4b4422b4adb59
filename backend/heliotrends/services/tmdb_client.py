"""TMDB trending client.

Bearer token auth is preferred; the v3 API key is used otherwise. With no
credentials configured the static mock listings are returned without a
network call.
"""

import logging

from heliotrends.config import settings
from heliotrends.services import upstream

logger = logging.getLogger(__name__)


def _auth() -> tuple[dict, dict] | None:
    """Return (params, headers) for the configured credential, if any."""
    params = {"language": "en-US"}
    if settings.tmdb_bearer_token:
        return params, {"Authorization": f"Bearer {settings.tmdb_bearer_token}"}
    if settings.tmdb_api_key:
        return {**params, "api_key": settings.tmdb_api_key}, {}
    return None


async def _fetch_trending(media_type: str, fallback) -> list[dict]:
    auth = _auth()
    if auth is None:
        logger.warning("TMDB credentials not configured, using mock %s data", media_type)
        return fallback()

    params, headers = auth
    return await upstream.fetch_or_fallback(
        f"TMDB trending {media_type}",
        f"{settings.tmdb_base_url}/trending/{media_type}/day",
        fallback,
        params=params,
        headers=headers,
        validate=upstream.require_results,
    )


async def fetch_trending_movies() -> list[dict]:
    return await _fetch_trending("movie", mock_movies)


async def fetch_trending_tv() -> list[dict]:
    return await _fetch_trending("tv", mock_tv_shows)


def mock_movies() -> list[dict]:
    return [
        {
            "id": 1,
            "title": "Solar Storm",
            "popularity": 2847.253,
            "vote_average": 8.7,
            "genre_ids": [878, 53, 28],  # Sci-Fi, Thriller, Action
        },
        {
            "id": 2,
            "title": "Geomagnetic",
            "popularity": 1456.789,
            "vote_average": 8.2,
            "genre_ids": [99, 878],  # Documentary, Sci-Fi
        },
        {
            "id": 3,
            "title": "The Aurora Effect",
            "popularity": 1234.567,
            "vote_average": 7.9,
            "genre_ids": [878, 14, 18],  # Sci-Fi, Fantasy, Drama
        },
    ]


def mock_tv_shows() -> list[dict]:
    return [
        {
            "id": 101,
            "name": "Space Weather Alert",
            "popularity": 3156.891,
            "vote_average": 8.5,
            "genre_ids": [99, 878, 18],  # Documentary, Sci-Fi, Drama
        },
        {
            "id": 102,
            "name": "Solar Flare Chronicles",
            "popularity": 2789.456,
            "vote_average": 8.1,
            "genre_ids": [878, 18, 10765],  # Sci-Fi, Drama, Sci-Fi & Fantasy
        },
        {
            "id": 103,
            "name": "Streaming in the Storm",
            "popularity": 1987.234,
            "vote_average": 7.6,
            "genre_ids": [35, 878],  # Comedy, Sci-Fi
        },
    ]
