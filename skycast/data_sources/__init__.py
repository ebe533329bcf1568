"""Provider clients and the factories that pick them."""

from .base import GeocodingSource, WeatherSource
from .factory import build_geocoding_source, build_weather_source
from .openweather_client import (
    GeocodingClient,
    WeatherClient,
    fetch_weather,
    geocode,
    normalize_weather,
    parse_coordinates,
)

__all__ = [
    "build_geocoding_source",
    "build_weather_source",
    "GeocodingSource",
    "WeatherSource",
    "GeocodingClient",
    "WeatherClient",
    "fetch_weather",
    "geocode",
    "normalize_weather",
    "parse_coordinates",
]
