"""Shared outbound HTTP for the upstream feeds.

Every feed follows the same policy: one timed request, no retries, and on any
failure the caller's static fallback payload is returned instead of an error.
"""

import logging
from typing import Any, Callable

import httpx

from heliotrends.config import settings

logger = logging.getLogger(__name__)


class UpstreamShapeError(ValueError):
    """Upstream answered 2xx but the payload is not usable."""


async def fetch_json(
    url: str,
    params: dict | None = None,
    headers: dict | None = None,
    method: str = "GET",
    json_body: Any = None,
) -> Any:
    """Issue a single request with the configured timeout and decode JSON."""
    request_headers = {"User-Agent": settings.user_agent}
    if headers:
        request_headers.update(headers)

    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
        resp = await client.request(
            method, url, params=params, headers=request_headers, json=json_body,
        )
        resp.raise_for_status()
        return resp.json()


async def fetch_or_fallback(
    feed: str,
    url: str,
    fallback: Callable[[], Any],
    params: dict | None = None,
    headers: dict | None = None,
    validate: Callable[[Any], Any] | None = None,
) -> Any:
    """Fetch ``url``; on any failure log it and return ``fallback()``.

    ``validate`` may reshape the payload and raises on unusable data.
    """
    try:
        data = await fetch_json(url, params=params, headers=headers)
        if validate is not None:
            data = validate(data)
        return data
    except Exception as e:
        logger.warning("%s fetch failed: %s", feed, e)
        return fallback()


def require_list(data: Any) -> list:
    if not isinstance(data, list) or not data:
        raise UpstreamShapeError(f"expected non-empty JSON array, got {type(data).__name__}")
    return require_rows(data)


def require_results(data: Any) -> list:
    """TMDB wraps listings in ``{"results": [...]}``."""
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise UpstreamShapeError("expected object with a 'results' array")
    return require_rows(data["results"])


def require_array(data: Any) -> list:
    """Like ``require_list`` but an empty array is a valid answer."""
    if not isinstance(data, list):
        raise UpstreamShapeError(f"expected JSON array, got {type(data).__name__}")
    return require_rows(data)


def require_rows(rows: list) -> list:
    """Every element must be a JSON object; NOAA also serves header-row tables."""
    for row in rows:
        if not isinstance(row, dict):
            raise UpstreamShapeError(f"expected array of objects, got {type(row).__name__} element")
    return rows
