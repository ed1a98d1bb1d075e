"""Commuter rail disruption risk from live weather and fixed heuristics."""

from .domain import LineType, PredictionResult, RiskResult, WeatherSnapshot
from .prediction_service import get_prediction
from .risk_engine import calculate_disruption_risk
from .tables import LINE_BASELINES

__all__ = [
    "get_prediction",
    "calculate_disruption_risk",
    "LINE_BASELINES",
    "LineType",
    "PredictionResult",
    "RiskResult",
    "WeatherSnapshot",
]
