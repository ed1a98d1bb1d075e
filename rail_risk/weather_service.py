"""Best-effort weather lookup for predictions.

Whatever goes wrong upstream is caught here, logged, and handed back as a
FetchResult carrying the error instead of a snapshot. Nothing past this
boundary sees an exception from the weather provider.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from rail_risk import config
from rail_risk.data_sources import WeatherDataSource, WeatherFetchError, build_data_source
from rail_risk.domain import WeatherSnapshot
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_service")


@dataclass(frozen=True)
class FetchResult:
    """Either a snapshot or the reason there is none."""
    snapshot: Optional[WeatherSnapshot] = None
    error: Optional[WeatherFetchError] = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None


def fetch_weather(
    data_source: WeatherDataSource | None = None,
    settings: config.Settings | None = None,
) -> FetchResult:
    """Fetch current weather once; never raises for provider failures."""
    settings = settings or config.settings
    data_source = data_source or build_data_source(settings)

    try:
        snapshot = data_source.fetch_weather_current(
            settings.latitude,
            settings.longitude,
            timezone=settings.timezone,
            timeout=settings.request_timeout_seconds,
        )
    except WeatherFetchError as exc:
        logger.warning("Weather fetch failed: %s", exc, extra={"error": str(exc)})
        return FetchResult(error=exc)
    except Exception as exc:
        logger.error("Unexpected error fetching weather: %r", exc, extra={"error": repr(exc)})
        return FetchResult(error=WeatherFetchError(str(exc) or type(exc).__name__))

    logger.debug(
        "Weather fetched",
        extra={"temperature": snapshot.temperature, "weather_code": snapshot.weather_code},
    )
    return FetchResult(snapshot=snapshot)


async def fetch_weather_async(
    data_source: WeatherDataSource | None = None,
    settings: config.Settings | None = None,
) -> FetchResult:
    """Run the blocking fetch in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(fetch_weather, data_source, settings)
