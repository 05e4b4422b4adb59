from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # NASA DONKI (flares, CMEs)
    nasa_api_key: str = Field(default="DEMO_KEY")
    nasa_base_url: str = Field(default="https://api.nasa.gov/DONKI")
    donki_lookback_days: int = Field(default=7)

    # NOAA SWPC (Kp index, solar wind)
    noaa_base_url: str = Field(default="https://services.swpc.noaa.gov/json")

    # TMDB trending. Bearer token wins over API key; neither = mock data
    tmdb_api_key: str = Field(default="")
    tmdb_bearer_token: str = Field(default="")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")

    # Outbound HTTP
    upstream_timeout_seconds: float = Field(default=10.0)
    user_agent: str = Field(default="HelioTrends/2.0")

    # Cache-Control max-age per endpoint (seconds)
    solar_cache_max_age: int = Field(default=300)
    trending_cache_max_age: int = Field(default=600)
    correlation_cache_max_age: int = Field(default=900)
    dashboard_cache_max_age: int = Field(default=300)

    # Jitter seed for the correlation engine. Leave unset in production.
    correlation_seed: int | None = Field(default=None)

    # Background dashboard sync
    sync_enabled: bool = Field(default=True)
    sync_interval_minutes: int = Field(default=5)

    # Dashboard polling interval (seconds) - sent to frontend
    dashboard_poll_interval: int = Field(default=300)

    # Live dashboard state
    notification_limit: int = Field(default=50, ge=1)
    history_limit: int = Field(default=90, ge=1)
    history_window: int = Field(default=7, ge=2)

    # CORS
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
