from datetime import datetime

from pydantic import AliasChoices, Field, computed_field

from heliotrends.schemas.base import CamelModel
from heliotrends.schemas.enums import ActivityLevel
from heliotrends.services.classification import activity_level_for_kp, flare_intensity


class FlareEvent(CamelModel):
    model_config = {"frozen": True}

    id: str
    class_type: str = ""
    peak_time: str | None = None  # DONKI format, e.g. 2024-05-10T06:54Z

    @computed_field(alias="intensity")
    @property
    def intensity(self) -> float:
        return flare_intensity(self.class_type)


class CMEEvent(CamelModel):
    model_config = {"frozen": True}

    id: str
    start_time: str | None = None
    speed_km_s: float = Field(
        default=0.0,
        validation_alias=AliasChoices("speed", "speedKmS", "speed_km_s"),
        serialization_alias="speed",
    )
    direction: str = ""


class SolarWind(CamelModel):
    model_config = {"frozen": True}

    speed_km_s: float = Field(
        default=400.0,
        validation_alias=AliasChoices("speed", "speedKmS", "speed_km_s"),
        serialization_alias="speed",
    )
    density_per_cm3: float = Field(
        default=5.0,
        validation_alias=AliasChoices("density", "densityPerCm3", "density_per_cm3"),
        serialization_alias="density",
    )
    temperature_k: float = Field(
        default=100000.0,
        validation_alias=AliasChoices("temperature", "temperatureK", "temperature_k"),
        serialization_alias="temperature",
    )


class SolarSnapshot(CamelModel):
    """Point-in-time space-weather state, rebuilt on every request."""

    model_config = {"frozen": True}

    kp_index: float = Field(ge=0, le=9)
    estimated_kp: float = Field(default=0.0, ge=0, le=9)
    solar_flares: list[FlareEvent] = []
    cme_events: list[CMEEvent] = []
    solar_wind: SolarWind = SolarWind()
    last_update: datetime | None = None

    @computed_field(alias="activityLevel")
    @property
    def activity_level(self) -> ActivityLevel:
        return activity_level_for_kp(self.kp_index)
