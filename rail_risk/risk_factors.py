"""Pure sub-score functions, one input dimension each.

Every function here is deterministic: the time-based factors take the
evaluation instant as an argument instead of reading the clock.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from rail_risk.domain import LineType
from rail_risk.tables import DAY_RISK, DEFAULT_TIMEZONE

BASE_WEATHER_RISK = 30
MAX_RISK = 100

DAY_SCALE = 50
TIME_SCALE = 40
SEASONAL_SCALE = 35


def round_half_up(value: float) -> int:
    """Round .5 upward, matching how scores have always been rounded."""
    return int(math.floor(value + 0.5))


def _get_field(weather: Any, key: str, default=None):
    """Support attribute or Mapping access for weather snapshots."""
    if weather is None:
        return default
    if isinstance(weather, Mapping):
        value = weather.get(key, default)
    else:
        value = getattr(weather, key, default)
    return default if value is None else value


def to_local(now: dt.datetime | None, tz_name: str = DEFAULT_TIMEZONE) -> dt.datetime:
    """Resolve the evaluation instant in the line's local timezone.

    ``None`` means the current instant; naive datetimes are taken as local.
    """
    tz = ZoneInfo(tz_name)
    if now is None:
        return dt.datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def calculate_weather_risk(weather: Any) -> int:
    """Score current conditions from a base of 30, capped at 100.

    Each category adds at most one increment (highest threshold first).
    Missing precipitation, wind, snow and rain count as zero; a missing
    temperature skips the temperature check.
    """
    risk = BASE_WEATHER_RISK
    if weather is None:
        return risk

    # Thresholds are applied to the provider's value as-is (°C by default).
    temp = _get_field(weather, "temperature")
    if temp is not None:
        if temp < 20:
            risk += 25
        elif temp < 32:
            risk += 15
        elif temp > 95:
            risk += 20
        elif temp > 85:
            risk += 10

    precip = _get_field(weather, "precipitation", 0)
    if precip > 0.5:
        risk += 30
    elif precip > 0.1:
        risk += 15
    elif precip > 0:
        risk += 8

    wind = _get_field(weather, "wind_speed", 0)
    if wind > 40:
        risk += 25
    elif wind > 25:
        risk += 12
    elif wind > 15:
        risk += 5

    snow = _get_field(weather, "snowfall", 0)
    if snow > 4:
        risk += 40
    elif snow > 1:
        risk += 25
    elif snow > 0:
        risk += 15

    rain = _get_field(weather, "rain", 0)
    if rain > 0.5:
        risk += 20
    elif rain > 0.1:
        risk += 10

    return min(MAX_RISK, risk)


def sunday_weekday(day: dt.date) -> int:
    """Weekday index with 0 = Sunday .. 6 = Saturday."""
    return day.isoweekday() % 7


def get_day_multiplier(weekday: int) -> float:
    return DAY_RISK.get(weekday, 1.0)


def get_time_multiplier(hour: int) -> float:
    """Rush-hour weighting for a local hour of day (0-23)."""
    if 7 <= hour <= 9:
        return 1.3   # morning rush
    if 17 <= hour <= 19:
        return 1.35  # evening rush
    if 10 <= hour <= 16:
        return 0.9
    if hour >= 20 or hour <= 5:
        return 0.7
    return 1.0


def get_seasonal_multiplier(month: int, line_type: LineType | str = LineType.GENERAL) -> float:
    """Seasonal weighting for a calendar month (1 = January)."""
    if month in (10, 11):
        # leaf season hits Metro-North hardest
        return 1.3 if line_type == LineType.METRO_NORTH else 1.1
    if month in (12, 1, 2):
        return 1.25
    if month in (6, 7, 8):
        return 1.1
    return 1.0


def calculate_day_risk(now: dt.datetime) -> float:
    return get_day_multiplier(sunday_weekday(now.date())) * DAY_SCALE


def calculate_time_risk(now: dt.datetime) -> float:
    return get_time_multiplier(now.hour) * TIME_SCALE


def calculate_seasonal_risk(now: dt.datetime, line_type: LineType | str = LineType.GENERAL) -> float:
    return get_seasonal_multiplier(now.month, line_type) * SEASONAL_SCALE
