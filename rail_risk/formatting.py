"""Display formatting for weather snapshots attached to predictions."""

from __future__ import annotations

from typing import Optional

from rail_risk.domain import FormattedWeather, WeatherSnapshot
from rail_risk.risk_factors import round_half_up
from rail_risk.tables import (
    DEFAULT_WEATHER_EMOJI,
    STORM_CODE_THRESHOLD,
    STORM_EMOJI,
    UNKNOWN_WEATHER_DESCRIPTION,
    WEATHER_DESCRIPTIONS,
    WEATHER_EMOJI_RANGES,
)

DEFAULT_WIND_UNIT = "km/h"


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def format_temperature(temp_c: Optional[float]) -> str:
    """Render a Celsius reading as whole Fahrenheit, or a placeholder."""
    if temp_c is None:
        return "--°F"
    return f"{round_half_up(celsius_to_fahrenheit(temp_c))}°F"


def get_weather_description(code: Optional[int]) -> str:
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_WEATHER_DESCRIPTION)


def get_weather_emoji(code: Optional[int]) -> str:
    """Icon for a WMO weather code; unmapped codes get a thermometer."""
    if code is None:
        return DEFAULT_WEATHER_EMOJI
    for low, high, emoji in WEATHER_EMOJI_RANGES:
        if low <= code <= high:
            return emoji
    if code >= STORM_CODE_THRESHOLD:
        return STORM_EMOJI
    return DEFAULT_WEATHER_EMOJI


def format_wind(speed: Optional[float], unit: Optional[str] = None) -> Optional[str]:
    """Rounded wind speed with its unit; calm or missing wind renders as None."""
    if not speed:
        return None
    return f"{round_half_up(speed)} {unit or DEFAULT_WIND_UNIT}"


def format_weather(weather: Optional[WeatherSnapshot]) -> Optional[FormattedWeather]:
    if weather is None:
        return None
    return FormattedWeather(
        temperature=format_temperature(weather.temperature),
        description=get_weather_description(weather.weather_code),
        emoji=get_weather_emoji(weather.weather_code),
        wind_speed=format_wind(weather.wind_speed, weather.wind_speed_unit),
        precipitation=weather.precipitation,
    )
