"""Service configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the skycast service."""
    model_config = SettingsConfigDict(env_prefix="SKYCAST_", env_file=".env", extra="ignore")

    weather_source: str = "openweather"  # options: openweather
    openweather_api_key: str | None = None
    geocoding_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    weather_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    geocoding_limit: int = 1
    forecast_locale: str = "pl_PL"
    default_unit: str = "C"
    http_timeout_seconds: float = 10.0
    api_key: str | None = None
    session_ttl_seconds: int = 3600
    max_query_chars: int = 200
    log_level: str = "INFO"

    @field_validator("geocoding_url", "weather_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize provider URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("default_unit", mode="after")
    @classmethod
    def check_unit(cls, v: str) -> str:
        """Accept c/f in any case, reject everything else."""
        unit = str(v).strip().upper()
        if unit not in ("C", "F"):
            raise ValueError(f"default_unit must be 'C' or 'F', got {v!r}")
        return unit

    @field_validator("geocoding_limit", mode="after")
    @classmethod
    def check_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("geocoding_limit must be at least 1")
        return v


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'openweather_api_key', 'api_key'})}")
