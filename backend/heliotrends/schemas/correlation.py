from datetime import date, datetime

from pydantic import Field

from heliotrends.schemas.base import CamelModel
from heliotrends.schemas.enums import CorrelationStrength


class Anomaly(CamelModel):
    timestamp: datetime
    type: str
    description: str
    confidence: float


class CorrelationResult(CamelModel):
    coefficient: float = Field(ge=-1, le=1)
    strength: CorrelationStrength
    significance: float
    genre_correlations: dict[str, float] = {}
    anomalies: list[Anomaly] = []
    insights: list[str] = []
    last_calculated: datetime | None = None


class HistoryPoint(CamelModel):
    sample_date: date = Field(alias="date")
    solar_score: float
    trending_score: float
    correlation: float = 0.0
