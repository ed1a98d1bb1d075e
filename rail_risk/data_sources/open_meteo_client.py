"""Fetch current conditions for the forecast point from the Open-Meteo API."""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from rail_risk.data_sources.base import WeatherFetchError
from rail_risk.domain import WeatherSnapshot
from rail_risk.tables import DEFAULT_TIMEZONE, OPEN_METEO_WEATHER_URL
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

# One plain session: no retries and no response cache.
session = requests.Session()

CURRENT_VARS = [
    "temperature_2m",
    "precipitation",
    "rain",
    "snowfall",
    "wind_speed_10m",
    "weather_code",
]

HOURLY_VARS = [
    "temperature_2m",
    "precipitation_probability",
    "precipitation",
    "rain",
    "snowfall",
    "wind_speed_10m",
]

# Provider defaults; the scoring thresholds are applied to these units.
EXPECTED_CURRENT_UNITS = {
    "temperature_2m": "°C",
    "precipitation": "mm",
    "rain": "mm",
    "snowfall": "cm",
    "wind_speed_10m": "km/h",
}


def build_params(latitude: float, longitude: float, *, timezone: str = DEFAULT_TIMEZONE) -> Dict[str, Any]:
    """Query parameters for a one-day current + hourly request."""
    return {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "hourly": ",".join(HOURLY_VARS),
        "forecast_days": 1,
        "timezone": timezone,
    }


def _warn_on_unexpected_units(units: Any, *, context: str):
    """Log a warning if Open-Meteo returns units other than its defaults."""
    if not isinstance(units, dict):
        return
    for field, expected in EXPECTED_CURRENT_UNITS.items():
        actual = units.get(field)
        if actual and actual != expected:
            logger.warning(
                "Unexpected Open-Meteo unit for %s: %s (expected %s)",
                field,
                actual,
                expected,
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def parse_weather_payload(data: Any) -> WeatherSnapshot:
    """Map an Open-Meteo forecast body onto a WeatherSnapshot.

    A missing ``current`` block yields an empty snapshot; ``hourly`` is
    attached exactly as received.
    """
    if not isinstance(data, dict):
        raise WeatherFetchError(f"unexpected response body type {type(data).__name__}")

    current = data.get("current") or {}
    if not isinstance(current, dict):
        raise WeatherFetchError("'current' block is not an object")
    units = data.get("current_units") or {}
    _warn_on_unexpected_units(units, context="weather_current")

    hourly = data.get("hourly")

    try:
        return WeatherSnapshot(
            temperature=current.get("temperature_2m"),
            precipitation=current.get("precipitation"),
            rain=current.get("rain"),
            snowfall=current.get("snowfall"),
            wind_speed=current.get("wind_speed_10m"),
            wind_speed_unit=units.get("wind_speed_10m") if isinstance(units, dict) else None,
            weather_code=current.get("weather_code"),
            hourly=hourly,
        )
    except ValidationError as exc:
        raise WeatherFetchError(f"malformed current conditions: {exc.error_count()} invalid field(s)") from exc


def fetch_weather_current(
    latitude: float,
    longitude: float,
    *,
    timezone: str = DEFAULT_TIMEZONE,
    timeout: Optional[float] = 10,
    url: str = OPEN_METEO_WEATHER_URL,
) -> WeatherSnapshot:
    """Fetch current conditions plus today's hourly block.

    Raises WeatherFetchError on transport errors, non-2xx responses or a body
    that is not the expected JSON shape.
    """
    params = build_params(latitude, longitude, timezone=timezone)
    logger.debug("Requesting Open-Meteo current weather", extra={"latitude": latitude, "longitude": longitude})

    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise WeatherFetchError(f"Weather API failed: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        raise WeatherFetchError(f"Weather API returned invalid JSON: {exc}") from exc

    return parse_weather_payload(data)
