"""Pure helpers: temperature display conversion and condition classification."""
from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Dict, Optional, Union

from skycast.domain import ConditionCategory, TemperatureUnit

DisplayValue = Union[int, float]

_ONE_DECIMAL = Decimal("0.1")
_HALF = Decimal("0.5")

CONDITION_TABLE: Dict[str, ConditionCategory] = {
    "clear": ConditionCategory.CLEAR,
    "sunny": ConditionCategory.CLEAR,
    "rain": ConditionCategory.RAIN,
    "rainy": ConditionCategory.RAIN,
    "snow": ConditionCategory.SNOW,
    "snowy": ConditionCategory.SNOW,
    "clouds": ConditionCategory.CLOUDS,
    "cloudy": ConditionCategory.CLOUDS,
    "mist": ConditionCategory.MIST,
    "fog": ConditionCategory.MIST,
}


def _round_half_up_int(value: float) -> int:
    """Nearest integer, ties toward +infinity (36.5 -> 37, -0.5 -> 0)."""
    return int((Decimal(value) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def _round_one_decimal(value: float) -> float:
    """One decimal place on the exact binary value, ties away from zero."""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def convert_temperature(temp_c: float, unit: TemperatureUnit | str) -> DisplayValue:
    """
    Convert a Celsius reading into the value shown for `unit`.

    Celsius stays Celsius, rounded to one decimal. Fahrenheit is
    `temp * 9 / 5 + 32` rounded to a whole degree.
    """
    unit = TemperatureUnit(unit)
    if unit is TemperatureUnit.FAHRENHEIT:
        return _round_half_up_int(temp_c * 9 / 5 + 32)
    return _round_one_decimal(temp_c)


def classify_condition(raw: Optional[str]) -> ConditionCategory:
    """Map a provider condition label onto a display category; never raises."""
    if not isinstance(raw, str):
        return ConditionCategory.UNKNOWN
    return CONDITION_TABLE.get(raw.lower(), ConditionCategory.UNKNOWN)
