"""Clients for the OpenWeather geocoding and One Call APIs.

The HTTP calls are plain blocking `requests` calls; the async `resolve` and
`fetch` methods hand them to a worker thread so the event loop that owns the
resolution state never blocks.
"""
from __future__ import annotations

import asyncio
import datetime as dt
from typing import Any, List, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import requests
from babel.core import UnknownLocaleError
from babel.dates import format_date
from pydantic import ValidationError

from skycast.conversions import classify_condition
from skycast.domain import ConditionCategory, Coordinates, ForecastDay, WeatherSnapshot
from skycast.errors import MalformedResponseError, NetworkError, NotFoundError
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="openweather_client")

session = requests.Session()

OPENWEATHER_GEOCODING_URL = "https://api.openweathermap.org/geo/1.0/direct"
OPENWEATHER_ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"

DEFAULT_TIMEOUT_SECONDS = 10.0
FORECAST_DAYS = 5


def _get_json(url: str, params: Mapping[str, Any], *, timeout: float) -> Any:
    """GET `url` and return the decoded JSON body, mapping failures onto our taxonomy."""
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning(
            "OpenWeather request failed",
            extra={"url": mask_url(url), "error": str(exc)},
        )
        raise NetworkError(str(exc)) from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError(f"Non-JSON response from {mask_url(url)}") from exc


def _primary_condition(entry: Mapping[str, Any]) -> ConditionCategory:
    """Classify the first `weather[]` label of a current/daily record."""
    weather = entry.get("weather") or []
    if not weather:
        return ConditionCategory.UNKNOWN
    return classify_condition(weather[0].get("main"))


def _resolve_zone(tz_name: str | None) -> dt.tzinfo:
    """Return the location's zone, falling back to UTC when it is missing or unknown."""
    if not tz_name:
        return dt.timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone in weather payload; using UTC", extra={"timezone": tz_name})
        return dt.timezone.utc


def weekday_label(timestamp: int | float, tz: dt.tzinfo, locale: str) -> str:
    """Localized short weekday name for a unix timestamp, e.g. 'pon.' for pl_PL."""
    day = dt.datetime.fromtimestamp(timestamp, tz=tz).date()
    return format_date(day, "EEE", locale=locale)


def parse_coordinates(payload: Any) -> Coordinates:
    """Pick the first (best) geocoding candidate out of a provider response."""
    if not isinstance(payload, list):
        raise MalformedResponseError("Geocoding response is not a list")
    if not payload:
        raise NotFoundError("No location matched the query")

    best = payload[0]
    try:
        return Coordinates(latitude=float(best["lat"]), longitude=float(best["lon"]))
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise MalformedResponseError(f"Geocoding candidate without usable coordinates: {exc}") from exc


def normalize_weather(payload: Any, *, locale: str = "pl_PL") -> WeatherSnapshot:
    """
    Turn a One Call document into a WeatherSnapshot.

    Current readings are copied as-is. The forecast skips `daily[0]` (today)
    and keeps the next five days in order; shorter series give a shorter
    forecast.
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Weather response is not an object")

    tz = _resolve_zone(payload.get("timezone"))
    try:
        current = payload["current"]
        daily = payload.get("daily") or []

        forecast: List[ForecastDay] = []
        for day in daily[1:1 + FORECAST_DAYS]:
            forecast.append(
                ForecastDay(
                    label=weekday_label(day["dt"], tz, locale),
                    temperature_c=day["temp"]["day"],
                    condition=_primary_condition(day),
                )
            )

        return WeatherSnapshot(
            temperature_c=current["temp"],
            humidity_pct=current["humidity"],
            wind_speed_ms=current["wind_speed"],
            pressure_hpa=current["pressure"],
            condition=_primary_condition(current),
            forecast=forecast,
        )
    except (AttributeError, KeyError, TypeError, ValueError, OverflowError, ValidationError, UnknownLocaleError) as exc:
        raise MalformedResponseError(f"Unexpected weather payload: {exc}") from exc


def geocode(
    query: str,
    *,
    api_key: str | None,
    limit: int = 1,
    url: str = OPENWEATHER_GEOCODING_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Coordinates:
    """Resolve free text to the coordinates of the best match (blocking)."""
    params = {"q": query, "limit": limit, "appid": api_key}
    logger.debug("Geocoding query", extra={"query": query, "limit": limit})
    data = _get_json(url, params, timeout=timeout)
    coords = parse_coordinates(data)
    logger.info(
        "Geocoded query",
        extra={"query": query, "candidates": len(data), "latitude": coords.latitude, "longitude": coords.longitude},
    )
    return coords


def fetch_weather(
    coords: Coordinates,
    *,
    api_key: str | None,
    locale: str = "pl_PL",
    url: str = OPENWEATHER_ONECALL_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> WeatherSnapshot:
    """Fetch current + daily weather in metric units and normalize it (blocking)."""
    params = {
        "lat": coords.latitude,
        "lon": coords.longitude,
        "units": "metric",
        "appid": api_key,
    }
    data = _get_json(url, params, timeout=timeout)
    snapshot = normalize_weather(data, locale=locale)
    logger.info(
        "Fetched weather",
        extra={
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "condition": snapshot.condition.value,
            "forecast_days": len(snapshot.forecast),
        },
    )
    return snapshot


class GeocodingClient:
    """Async facade over `geocode`; one outbound call per `resolve`, no caching."""

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str = OPENWEATHER_GEOCODING_URL,
        limit: int = 1,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not api_key:
            logger.warning("OpenWeather API key is not set; geocoding requests will be rejected")
        self.api_key = api_key
        self.url = url
        self.limit = limit
        self.timeout = timeout

    async def resolve(self, query: str) -> Coordinates:
        return await asyncio.to_thread(
            geocode, query, api_key=self.api_key, limit=self.limit, url=self.url, timeout=self.timeout
        )


class WeatherClient:
    """Async facade over `fetch_weather`."""

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str = OPENWEATHER_ONECALL_URL,
        locale: str = "pl_PL",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not api_key:
            logger.warning("OpenWeather API key is not set; weather requests will be rejected")
        self.api_key = api_key
        self.url = url
        self.locale = locale
        self.timeout = timeout

    async def fetch(self, coords: Coordinates) -> WeatherSnapshot:
        return await asyncio.to_thread(
            fetch_weather, coords, api_key=self.api_key, locale=self.locale, url=self.url, timeout=self.timeout
        )
