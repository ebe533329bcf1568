"""Factory helpers for choosing the geocoding and weather providers at startup."""

from __future__ import annotations

from skycast import config
from skycast.data_sources.base import GeocodingSource, WeatherSource
from skycast.data_sources.openweather_client import GeocodingClient, WeatherClient
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "openweather"


def _source_name(settings: config.Settings) -> str:
    return (settings.weather_source or DEFAULT_SOURCE_NAME).lower()


def build_geocoding_source(settings: config.Settings | None = None) -> GeocodingSource:
    """Instantiate the configured geocoding provider."""
    settings = settings or config.settings
    source = _source_name(settings)

    if source == "openweather":
        logger.info("Using OpenWeather geocoding", extra={"url": mask_url(settings.geocoding_url)})
        return GeocodingClient(
            settings.openweather_api_key,
            url=settings.geocoding_url,
            limit=settings.geocoding_limit,
            timeout=settings.http_timeout_seconds,
        )

    raise ValueError(f"Unknown weather source '{source}'")


def build_weather_source(settings: config.Settings | None = None) -> WeatherSource:
    """Instantiate the configured weather provider."""
    settings = settings or config.settings
    source = _source_name(settings)

    if source == "openweather":
        logger.info("Using OpenWeather One Call", extra={"url": mask_url(settings.weather_url)})
        return WeatherClient(
            settings.openweather_api_key,
            url=settings.weather_url,
            locale=settings.forecast_locale,
            timeout=settings.http_timeout_seconds,
        )

    raise ValueError(f"Unknown weather source '{source}'")
