"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from rail_risk.domain import WeatherSnapshot


class WeatherFetchError(Exception):
    """Current weather could not be obtained (transport, status or body)."""


class WeatherDataSource(Protocol):
    """Interface for anything that can provide a current-weather snapshot."""

    def fetch_weather_current(
        self,
        latitude: float,
        longitude: float,
        *,
        timezone: str = "America/New_York",
        timeout: Optional[float] = None,
    ) -> WeatherSnapshot:
        """Return current conditions or raise WeatherFetchError."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap a callable so sources can be swapped without subclassing."""

    weather_current: Callable[..., WeatherSnapshot]

    def fetch_weather_current(self, *args, **kwargs) -> WeatherSnapshot:
        """Delegate to the configured current-weather callable."""
        return self.weather_current(*args, **kwargs)


def fetch_disabled(*_args, **_kwargs) -> WeatherSnapshot:
    """Stand-in source used when live weather is switched off."""
    raise WeatherFetchError("weather source disabled")
