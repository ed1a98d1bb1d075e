"""Combine sub-scores into an overall disruption risk.

Converts a weather snapshot, a line identity and an evaluation instant into a
RiskResult: weighted score, tier metadata and a randomly chosen tip. The
choice of tip goes through an injectable ``chooser`` so tests can drive it.
"""

from __future__ import annotations

import datetime as dt
import random
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence, Tuple

from rail_risk.domain import (
    DEFAULT_WEIGHTS,
    LineType,
    RiskFactors,
    RiskLevel,
    RiskResult,
    RiskTier,
    RiskWeights,
)
from rail_risk.risk_factors import (
    MAX_RISK,
    calculate_day_risk,
    calculate_seasonal_risk,
    calculate_time_risk,
    calculate_weather_risk,
    round_half_up,
    to_local,
)
from rail_risk.tables import DEFAULT_BASELINE, DEFAULT_TIMEZONE, LINE_BASELINES

Chooser = Callable[[Sequence[str]], str]

# Lower bounds (inclusive), checked highest first.
TIER_THRESHOLDS: Tuple[Tuple[int, RiskTier], ...] = (
    (70, RiskTier.HIGH),
    (50, RiskTier.MODERATE),
    (35, RiskTier.LOW),
)

RISK_LEVELS: Mapping[RiskTier, RiskLevel] = MappingProxyType({
    RiskTier.HIGH: RiskLevel(tier=RiskTier.HIGH, label="High Risk", color="#dc3545", emoji="🔴"),
    RiskTier.MODERATE: RiskLevel(tier=RiskTier.MODERATE, label="Moderate Risk", color="#fd7e14", emoji="🟠"),
    RiskTier.LOW: RiskLevel(tier=RiskTier.LOW, label="Low Risk", color="#ffc107", emoji="🟡"),
    RiskTier.MINIMAL: RiskLevel(tier=RiskTier.MINIMAL, label="Minimal Risk", color="#28a745", emoji="🟢"),
})

RECOMMENDATIONS: Mapping[RiskTier, Tuple[str, ...]] = MappingProxyType({
    RiskTier.HIGH: (
        "Consider alternative transportation today",
        "Build in extra buffer time (30+ mins)",
        "Check real-time alerts before leaving",
        "Have a backup plan ready",
    ),
    RiskTier.MODERATE: (
        "Allow 15-20 extra minutes",
        "Keep an eye on service alerts",
        "Delays are likely during rush hour",
        "Consider off-peak travel if possible",
    ),
    RiskTier.LOW: (
        "Normal delays possible",
        "Standard buffer time should be fine",
        "Conditions look manageable",
        "Minor delays may occur",
    ),
    RiskTier.MINIMAL: (
        "Looking good for your commute!",
        "Conditions are favorable today",
        "Low chance of significant delays",
        "Smooth sailing expected",
    ),
})


def get_line_baseline(line_name: str) -> int:
    """Static baseline for a line; unknown lines get the default."""
    return LINE_BASELINES.get(line_name, DEFAULT_BASELINE)


def get_risk_tier(risk: float) -> RiskTier:
    for lower, tier in TIER_THRESHOLDS:
        if risk >= lower:
            return tier
    return RiskTier.MINIMAL


def get_risk_level(risk: float) -> RiskLevel:
    """Label, color and icon for the tier ``risk`` falls in."""
    return RISK_LEVELS[get_risk_tier(risk)]


def get_recommendation(risk: float, chooser: Chooser | None = None) -> str:
    """Pick one of the tier's tips; ``chooser`` defaults to ``random.choice``."""
    tips = RECOMMENDATIONS[get_risk_tier(risk)]
    choose = chooser or random.choice
    return choose(tips)


def _clamp_risk(score: int) -> int:
    return max(0, min(MAX_RISK, score))


def calculate_disruption_risk(
    line_name: str,
    weather: Any,
    line_type: LineType | str = LineType.LIRR,
    *,
    now: dt.datetime | None = None,
    chooser: Chooser | None = None,
    weights: RiskWeights = DEFAULT_WEIGHTS,
    timezone: str = DEFAULT_TIMEZONE,
) -> RiskResult:
    """Score disruption risk for ``line_name`` at the instant ``now``.

    ``weather`` may be a WeatherSnapshot, an equivalent mapping, or None.
    The reported factors are the unweighted sub-scores, rounded; they are
    diagnostic and do not add up to ``overall``.
    """
    local_now = to_local(now, timezone)

    weather_risk = calculate_weather_risk(weather)
    day_risk = calculate_day_risk(local_now)
    time_risk = calculate_time_risk(local_now)
    seasonal_risk = calculate_seasonal_risk(local_now, line_type)
    baseline_risk = get_line_baseline(line_name)

    combined = round_half_up(
        weather_risk * weights.weather
        + day_risk * weights.day_of_week
        + time_risk * weights.time_of_day
        + seasonal_risk * weights.seasonal
        + baseline_risk * weights.baseline
    )
    overall = _clamp_risk(combined)

    return RiskResult(
        overall=overall,
        factors=RiskFactors(
            weather=round_half_up(weather_risk),
            day_of_week=round_half_up(day_risk),
            time_of_day=round_half_up(time_risk),
            seasonal=round_half_up(seasonal_risk),
            baseline=baseline_risk,
        ),
        risk_level=get_risk_level(overall),
        recommendation=get_recommendation(overall, chooser),
    )
