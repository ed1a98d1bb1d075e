"""Weather data sources and the factory that picks one."""

from .base import CallableWeatherDataSource, WeatherDataSource, WeatherFetchError
from .factory import build_data_source
from .open_meteo_client import fetch_weather_current, parse_weather_payload

__all__ = [
    "build_data_source",
    "CallableWeatherDataSource",
    "WeatherDataSource",
    "WeatherFetchError",
    "fetch_weather_current",
    "parse_weather_payload",
]
