"""Static lookup tables for disruption scoring.

Everything here is process-wide and read-only: the mappings are wrapped in
``MappingProxyType`` so callers (including the HTTP layer that exposes
``LINE_BASELINES``) cannot mutate them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

# NYC; the only point weather is fetched for.
DEFAULT_LATITUDE = 40.7128
DEFAULT_LONGITUDE = -74.0060
DEFAULT_TIMEZONE = "America/New_York"

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"

DEFAULT_BASELINE = 40

# Historical baseline risk by line (0-100, typical performance).
LINE_BASELINES: Mapping[str, int] = MappingProxyType({
    # LIRR
    "Port Washington": 35,
    "Oyster Bay": 30,
    "Ronkonkoma": 45,
    "Montauk": 50,
    "Long Beach": 40,
    "Hempstead": 38,
    "Babylon": 48,
    "Far Rockaway": 35,
    "West Hempstead": 32,
    "City Terminal Zone": 55,
    # NJ Transit
    "Northeast Corridor": 50,
    "North Jersey Coast": 42,
    "Raritan Valley": 45,
    "Morris & Essex": 40,
    "Main/Bergen": 38,
    "Montclair-Boonton": 40,
    "Pascack Valley": 35,
    "Port Jervis": 48,
    "Atlantic City": 38,
    "Gladstone Branch": 32,
    "Morristown Line": 42,
    "Princeton Branch": 28,
    # Metro-North
    "Hudson Line": 35,
    "Harlem Line": 33,
    "New Haven Line": 42,
    "New Canaan Branch": 30,
    "Danbury Branch": 32,
    "Waterbury Branch": 35,
    "Wassaic Branch": 38,
})

# Weekday multipliers, 0 = Sunday.
DAY_RISK: Mapping[int, float] = MappingProxyType({
    0: 0.6,   # reduced Sunday service
    1: 1.1,
    2: 1.0,
    3: 1.0,
    4: 1.0,
    5: 1.15,  # Friday volume
    6: 0.7,
})

WEATHER_DESCRIPTIONS: Mapping[int, str] = MappingProxyType({
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Freezing rain (light)",
    67: "Freezing rain (heavy)",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
})

UNKNOWN_WEATHER_DESCRIPTION = "Unknown"

# Inclusive WMO code ranges -> icon; first match wins. Codes >= 95 are storms.
WEATHER_EMOJI_RANGES: Tuple[Tuple[int, int, str], ...] = (
    (0, 1, "☀️"),
    (2, 3, "⛅"),
    (45, 48, "🌫️"),
    (51, 55, "🌧️"),
    (61, 67, "🌧️"),
    (71, 77, "❄️"),
    (80, 82, "🌦️"),
    (85, 86, "🌨️"),
)
STORM_CODE_THRESHOLD = 95
STORM_EMOJI = "⛈️"
DEFAULT_WEATHER_EMOJI = "🌡️"
