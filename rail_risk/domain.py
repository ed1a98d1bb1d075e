"""Domain vocabulary and schemas for rail disruption predictions.

This module defines the payloads that flow between the weather fetcher, the
scoring engine and the HTTP layer: enums for line categories and risk tiers,
the weather snapshot, and the result models. No scoring logic lives here.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenBaseModel(BaseModel):
    """Immutable base model; instances live for one prediction."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class LineType(str, Enum):
    """Coarse network tag; only selects the seasonal multiplier variant."""
    LIRR = "lirr"
    NJ_TRANSIT = "njt"
    METRO_NORTH = "mnr"
    GENERAL = "general"


class RiskTier(str, Enum):
    """Four labeled bands derived from the overall score."""
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    MINIMAL = "minimal"


class WeatherSnapshot(_FrozenBaseModel):
    """Current conditions at the forecast point, as supplied by the provider.

    Units follow the provider defaults: temperature in °C, precipitation and
    rain in mm, snowfall in cm, wind in ``wind_speed_unit`` (km/h unless the
    provider reports otherwise). ``hourly`` is the raw hourly block, passed
    through untouched for presentation layers.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    temperature: float | None = None
    precipitation: float | None = None
    rain: float | None = None
    snowfall: float | None = None
    wind_speed: float | None = None
    wind_speed_unit: str | None = None
    weather_code: int | None = None
    hourly: Any = None


class RiskWeights(_FrozenBaseModel):
    """Weights for combining sub-scores. Must sum to 1.0."""
    weather: float = 0.35
    day_of_week: float = 0.20
    time_of_day: float = 0.15
    seasonal: float = 0.15
    baseline: float = 0.15

    @model_validator(mode="after")
    def check_sum(self) -> "RiskWeights":
        total = self.weather + self.day_of_week + self.time_of_day + self.seasonal + self.baseline
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"risk weights must sum to 1.0, got {total}")
        return self


DEFAULT_WEIGHTS = RiskWeights()


class RiskFactors(_StrictBaseModel):
    """Unweighted, rounded sub-scores. Diagnostic; they do not sum to overall."""
    weather: int
    day_of_week: int
    time_of_day: int
    seasonal: int
    baseline: int


class RiskLevel(_FrozenBaseModel):
    """Display metadata for a risk tier."""
    tier: RiskTier
    label: str
    color: str
    emoji: str


class RiskResult(_StrictBaseModel):
    """Output of the risk combiner."""
    overall: int
    factors: RiskFactors
    risk_level: RiskLevel
    recommendation: str


class FormattedWeather(_StrictBaseModel):
    """Display-ready weather summary attached to a prediction."""
    temperature: str
    description: str
    emoji: str
    wind_speed: str | None = None
    precipitation: float | None = None


class PredictionResult(RiskResult):
    """Full prediction returned to callers and serialized by the API."""
    weather: FormattedWeather | None = None
    timestamp: str
    line: str
