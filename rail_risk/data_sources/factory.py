"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from functools import partial

from rail_risk import config
from rail_risk.data_sources.base import CallableWeatherDataSource, WeatherDataSource, fetch_disabled
from rail_risk.data_sources.open_meteo_client import fetch_weather_current
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info("Using Open-Meteo data source")
        return CallableWeatherDataSource(
            weather_current=partial(fetch_weather_current, url=settings.weather_api_url),
        )

    if source == "disabled":
        logger.info("Live weather disabled; predictions will use non-weather factors only")
        return CallableWeatherDataSource(weather_current=fetch_disabled)

    raise ValueError(f"Unknown weather source '{source}'")
