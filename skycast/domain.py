"""Domain vocabulary and schemas for the location-to-weather pipeline.

This module is the contract between the provider clients, the resolution
controller and whatever renders the result: enums, the normalized weather
records and the tagged resolution states. No fetching or interpretation logic
lives here.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _StrictBaseModel(BaseModel):
    """Base model that rejects unknown fields and is immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class ConditionCategory(str, Enum):
    """Closed set of display categories for weather conditions."""
    CLEAR = "clear"
    RAIN = "rain"
    SNOW = "snow"
    CLOUDS = "clouds"
    MIST = "mist"
    UNKNOWN = "unknown"


class TemperatureUnit(str, Enum):
    """Temperature unit selected for display."""
    CELSIUS = "C"
    FAHRENHEIT = "F"

    def other(self) -> "TemperatureUnit":
        """Return the unit a toggle switches to."""
        if self is TemperatureUnit.CELSIUS:
            return TemperatureUnit.FAHRENHEIT
        return TemperatureUnit.CELSIUS


class FailureReason(str, Enum):
    """Why a resolution cycle ended in the failed state."""
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"


class Coordinates(_StrictBaseModel):
    """Geographic position of the best geocoding match."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ForecastDay(_StrictBaseModel):
    """One upcoming day of the forecast, temperature in Celsius."""
    label: str
    temperature_c: float
    condition: ConditionCategory


class WeatherSnapshot(_StrictBaseModel):
    """Normalized current conditions plus up to five forecast days."""
    temperature_c: float
    humidity_pct: int = Field(ge=0, le=100)
    wind_speed_ms: float = Field(ge=0)
    pressure_hpa: float = Field(gt=0)
    condition: ConditionCategory
    forecast: List[ForecastDay] = Field(default_factory=list, max_length=5)


class Idle(_StrictBaseModel):
    """Nothing has been searched yet."""
    status: Literal["idle"] = "idle"


class Loading(_StrictBaseModel):
    """A geocode or weather call is in flight."""
    status: Literal["loading"] = "loading"


class Ready(_StrictBaseModel):
    """The latest cycle produced a snapshot."""
    status: Literal["ready"] = "ready"
    snapshot: WeatherSnapshot


class Failed(_StrictBaseModel):
    """The latest cycle failed; no snapshot is shown."""
    status: Literal["failed"] = "failed"
    reason: FailureReason


ResolutionState = Annotated[Union[Idle, Loading, Ready, Failed], Field(discriminator="status")]
