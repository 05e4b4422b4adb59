from datetime import datetime

from heliotrends.schemas.base import CamelModel


class TrendingItem(CamelModel):
    model_config = {"frozen": True}

    id: int
    title: str | None = None  # movies
    name: str | None = None  # tv shows
    popularity: float = 0.0
    genres: list[str] = []
    rating: float = 0.0

    @property
    def display_title(self) -> str:
        return self.title or self.name or "Unknown"


class GenreStat(CamelModel):
    model_config = {"frozen": True}

    name: str
    count: int = 0
    popularity: float = 0.0  # average across items carrying the genre


class TrendingSnapshot(CamelModel):
    """Point-in-time entertainment trending state, rebuilt on every request."""

    model_config = {"frozen": True}

    trending_movies: list[TrendingItem] = []
    trending_tv: list[TrendingItem] = []
    top_genres: list[GenreStat] = []
    aggregated_score: float = 0.0
    last_update: datetime | None = None
