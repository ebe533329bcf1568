"""Display-ready view of the resolution state for whatever renders it."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from skycast.conversions import convert_temperature
from skycast.domain import (
    ConditionCategory,
    Failed,
    FailureReason,
    Loading,
    Ready,
    ResolutionState,
    TemperatureUnit,
)

# Polish, like the default forecast locale.
LOADING_MESSAGE = "Ładowanie..."
PROMPT_MESSAGE = "Wpisz lokalizację i wyszukaj, aby zobaczyć pogodę"


class ForecastDayView(BaseModel):
    """One forecast column: weekday, temperature in the active unit, icon category."""
    label: str
    temperature: str
    condition: ConditionCategory


class WeatherView(BaseModel):
    """What the renderer shows: a loading indicator, a prompt, or a full snapshot."""
    status: Literal["loading", "prompt", "ready"]
    unit: TemperatureUnit
    toggle_label: str
    message: Optional[str] = None
    error: Optional[FailureReason] = None
    temperature: Optional[str] = None
    condition: Optional[ConditionCategory] = None
    humidity: Optional[str] = None
    wind_speed: Optional[str] = None
    pressure: Optional[str] = None
    forecast: List[ForecastDayView] = []


def _number(value: float) -> str:
    """Plain number without a trailing '.0': 21.0 -> '21', 1234.5678 stays as is."""
    return f"{value:.12g}"


def _fmt(value: float, unit: str) -> str:
    """Format a raw provider reading with its unit."""
    return f"{_number(value)} {unit}"


def present(state: ResolutionState, unit: TemperatureUnit | str) -> WeatherView:
    """Build the view for `state` in `unit`. Pure; changing unit never re-fetches."""
    unit = TemperatureUnit(unit)
    toggle_label = f"°{unit.other().value}"

    if isinstance(state, Loading):
        return WeatherView(status="loading", unit=unit, toggle_label=toggle_label, message=LOADING_MESSAGE)

    if not isinstance(state, Ready):
        # Idle and Failed both fall back to the search prompt; no stale snapshot survives a failure.
        return WeatherView(
            status="prompt",
            unit=unit,
            toggle_label=toggle_label,
            message=PROMPT_MESSAGE,
            error=state.reason if isinstance(state, Failed) else None,
        )

    snapshot = state.snapshot
    return WeatherView(
        status="ready",
        unit=unit,
        toggle_label=toggle_label,
        temperature=f"{_number(convert_temperature(snapshot.temperature_c, unit))}°{unit.value}",
        condition=snapshot.condition,
        humidity=f"{snapshot.humidity_pct}%",
        wind_speed=_fmt(snapshot.wind_speed_ms, "m/s"),
        pressure=_fmt(snapshot.pressure_hpa, "hPa"),
        forecast=[
            ForecastDayView(
                label=day.label,
                temperature=f"{_number(convert_temperature(day.temperature_c, unit))}°",
                condition=day.condition,
            )
            for day in snapshot.forecast
        ],
    )
