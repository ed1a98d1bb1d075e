"""Top-level prediction entry point: weather, scoring and display formatting."""
from __future__ import annotations

import datetime as dt

from rail_risk import config
from rail_risk.data_sources import WeatherDataSource
from rail_risk.domain import LineType, PredictionResult
from rail_risk.formatting import format_weather
from rail_risk.risk_engine import Chooser, calculate_disruption_risk
from rail_risk.risk_factors import to_local
from rail_risk.weather_service import fetch_weather_async
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="prediction_service")


async def get_prediction(
    line_name: str,
    line_type: LineType | str | None = None,
    *,
    data_source: WeatherDataSource | None = None,
    now: dt.datetime | None = None,
    chooser: Chooser | None = None,
    settings: config.Settings | None = None,
) -> PredictionResult:
    """Predict disruption risk for a line right now (or at ``now``).

    Weather failures degrade to ``weather=None`` and the base weather score;
    this coroutine does not raise for them.
    """
    settings = settings or config.settings
    if line_type is None:
        line_type = settings.default_line_type

    result = await fetch_weather_async(data_source, settings)
    weather = result.snapshot

    evaluated_at = to_local(now, settings.timezone)
    risk = calculate_disruption_risk(
        line_name,
        weather,
        line_type,
        now=evaluated_at,
        chooser=chooser,
        timezone=settings.timezone,
    )

    logger.info(
        "Prediction for %s: %d (%s)",
        line_name,
        risk.overall,
        risk.risk_level.label,
        extra={"line": line_name, "overall": risk.overall, "weather_ok": result.ok},
    )

    return PredictionResult(
        **risk.model_dump(),
        weather=format_weather(weather),
        timestamp=evaluated_at.astimezone(dt.timezone.utc).isoformat(),
        line=line_name,
    )
