"""Builds a TrendingSnapshot from the TMDB trending feeds."""

import asyncio
from datetime import datetime, timezone

from heliotrends.schemas.trending import GenreStat, TrendingItem, TrendingSnapshot
from heliotrends.services import tmdb_client

TOP_GENRE_LIMIT = 10

# TMDB genre ids across the movie and tv catalogues.
GENRE_MAP: dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
    10759: "Action & Adventure",
    10762: "Kids",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
}


async def fetch_trending_snapshot(now: datetime | None = None) -> TrendingSnapshot:
    movies, shows = await asyncio.gather(
        tmdb_client.fetch_trending_movies(),
        tmdb_client.fetch_trending_tv(),
    )
    return build_trending_snapshot(movies, shows, now=now)


def map_genres(genre_ids: list[int] | None) -> list[str]:
    """Map TMDB ids to names. Unmapped ids are dropped; duplicates collapse."""
    names: list[str] = []
    if not isinstance(genre_ids, list):
        return []
    for genre_id in genre_ids:
        name = GENRE_MAP.get(genre_id)
        if name and name not in names:
            names.append(name)
    return names


def build_trending_snapshot(
    movies: list[dict],
    shows: list[dict],
    now: datetime | None = None,
) -> TrendingSnapshot:
    trending_movies = [_item(m, title=m.get("title")) for m in movies]
    trending_tv = [_item(s, name=s.get("name")) for s in shows]
    everything = trending_movies + trending_tv

    return TrendingSnapshot(
        trending_movies=trending_movies,
        trending_tv=trending_tv,
        top_genres=top_genres(everything),
        aggregated_score=aggregated_score(everything),
        last_update=now or datetime.now(timezone.utc),
    )


def top_genres(items: list[TrendingItem], limit: int = TOP_GENRE_LIMIT) -> list[GenreStat]:
    """Average popularity per genre, most popular first."""
    counts: dict[str, int] = {}
    totals: dict[str, float] = {}
    for item in items:
        for genre in item.genres:
            counts[genre] = counts.get(genre, 0) + 1
            totals[genre] = totals.get(genre, 0.0) + item.popularity

    stats = [
        GenreStat(name=name, count=counts[name], popularity=totals[name] / counts[name])
        for name in counts
    ]
    stats.sort(key=lambda g: g.popularity, reverse=True)
    return stats[:limit]


def aggregated_score(items: list[TrendingItem]) -> float:
    if not items:
        return 0.0
    return sum(i.popularity for i in items) / len(items)


def _item(row: dict, title: str | None = None, name: str | None = None) -> TrendingItem:
    return TrendingItem(
        id=row.get("id", 0),
        title=title,
        name=name,
        popularity=row.get("popularity") or 0.0,
        genres=map_genres(row.get("genre_ids")),
        rating=row.get("vote_average") or 0.0,
    )
