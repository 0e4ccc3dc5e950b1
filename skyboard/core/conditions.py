"""Pure display helpers shared by every client of the weather API.

Condition codes follow the OpenWeatherMap taxonomy
(https://openweathermap.org/weather-conditions).
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Literal, Tuple

TemperatureUnit = Literal["celsius", "fahrenheit"]

KELVIN_OFFSET = 273.15

# Dust, sand and volcanic ash share a background.
_DUST_CODES = frozenset({731, 751, 761})


# Temperature ------------------------------------------------------------
def _round_half_up(value: float) -> int:
    # Clients round .5 up; Python's round() would pick the even neighbour.
    return math.floor(value + 0.5)


def kelvin_to_celsius(kelvin: float) -> int:
    return _round_half_up(kelvin - KELVIN_OFFSET)


def kelvin_to_fahrenheit(kelvin: float) -> int:
    return _round_half_up((kelvin - KELVIN_OFFSET) * 9 / 5 + 32)


def convert_temperature(kelvin: float, unit: TemperatureUnit) -> int:
    if unit == "celsius":
        return kelvin_to_celsius(kelvin)
    if unit == "fahrenheit":
        return kelvin_to_fahrenheit(kelvin)
    raise ValueError(f"Unknown temperature unit: {unit}")


def format_temperature(value: int, unit: TemperatureUnit) -> str:
    return f"{value}°{'C' if unit == 'celsius' else 'F'}"


# Conditions -------------------------------------------------------------
def condition_category(code: int) -> str:
    """Map a condition code to its provider group name."""
    if 200 <= code < 300:
        return "thunderstorm"
    if 300 <= code < 400:
        return "drizzle"
    if 500 <= code < 600:
        return "rain"
    if 600 <= code < 700:
        return "snow"
    if 700 <= code < 800:
        return "atmosphere"
    if code == 800:
        return "clear"
    if code > 800:
        return "clouds"
    return "unknown"


def condition_icon(code: int, is_day: bool = True) -> str:
    """Return the Material icon name used for a condition code."""
    category = condition_category(code)
    if category == "thunderstorm":
        return "thunderstorm"
    if category == "drizzle":
        return "grain"
    if category == "rain":
        return "water_drop"
    if category == "snow":
        return "ac_unit"
    if category == "atmosphere":
        return "cyclone" if code == 781 else "foggy"
    if code == 801:
        return "partly_cloudy_day" if is_day else "nights_stay"
    if category == "clouds":
        return "wb_cloudy"
    return "wb_sunny" if is_day else "nights_stay"


def weather_background(code: int, is_day: bool) -> str:
    category = condition_category(code)
    if category == "thunderstorm":
        return "bg-thunderstorm"
    if category in ("drizzle", "rain"):
        return "bg-rainy"
    if category == "snow":
        return "bg-snow"
    if category == "atmosphere":
        return "bg-dust" if code in _DUST_CODES else "bg-fog"
    if category == "clouds":
        return "bg-cloudy"
    return "bg-clear-day" if is_day else "bg-night"


# Coordinates ------------------------------------------------------------
def same_coordinates(first: Tuple[float, float], second: Tuple[float, float]) -> bool:
    """Exact comparison; provider coordinates are stable per place."""
    return first[0] == second[0] and first[1] == second[1]


# Time -------------------------------------------------------------------
def is_daytime(sunrise: int, sunset: int, now: int) -> bool:
    return sunrise < now < sunset


def _local_time(timestamp: int, offset_seconds: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc) + timedelta(seconds=offset_seconds)


def format_time(timestamp: int, offset_seconds: int = 0) -> str:
    """``1:05 PM`` style clock time at the location."""
    local = _local_time(timestamp, offset_seconds)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_day(timestamp: int, offset_seconds: int = 0) -> str:
    return _local_time(timestamp, offset_seconds).strftime("%a")


def format_date(timestamp: int, offset_seconds: int = 0) -> str:
    local = _local_time(timestamp, offset_seconds)
    return f"{local.strftime('%A, %B')} {local.day}"


__all__ = [
    "TemperatureUnit",
    "kelvin_to_celsius",
    "kelvin_to_fahrenheit",
    "convert_temperature",
    "format_temperature",
    "condition_category",
    "condition_icon",
    "weather_background",
    "same_coordinates",
    "is_daytime",
    "format_time",
    "format_day",
    "format_date",
]
