import asyncio
import datetime as dt
import json

import requests

from rail_risk.config import Settings
from rail_risk.data_sources import CallableWeatherDataSource, WeatherFetchError
from rail_risk.data_sources import open_meteo_client
from rail_risk.data_sources.factory import build_data_source
from rail_risk.domain import LineType, PredictionResult, RiskTier, WeatherSnapshot
from rail_risk.prediction_service import get_prediction
from rail_risk.risk_engine import RECOMMENDATIONS

TUESDAY_8AM_MARCH = dt.datetime(2025, 3, 11, 8, 0)


def _failing_source():
    def boom(*_args, **_kwargs):
        raise WeatherFetchError("Weather API failed")
    return CallableWeatherDataSource(weather_current=boom)


def _static_source(snapshot):
    return CallableWeatherDataSource(weather_current=lambda *a, **k: snapshot)


def _first(tips):
    return tips[0]


def test_prediction_degrades_when_weather_fails():
    result = asyncio.run(
        get_prediction("Ronkonkoma", "lirr", data_source=_failing_source(), now=TUESDAY_8AM_MARCH, chooser=_first)
    )
    assert isinstance(result, PredictionResult)
    assert result.weather is None
    assert result.factors.weather == 30
    assert result.overall == 40
    assert result.risk_level.label == "Low Risk"
    assert result.recommendation in RECOMMENDATIONS[RiskTier.LOW]
    assert result.line == "Ronkonkoma"
    assert result.timestamp == "2025-03-11T12:00:00+00:00"


def test_prediction_with_weather_is_formatted():
    snapshot = WeatherSnapshot(
        temperature=15.0,
        precipitation=0.0,
        wind_speed=12.4,
        wind_speed_unit="km/h",
        weather_code=3,
        hourly={"time": ["2025-03-11T08:00"]},
    )
    result = asyncio.run(
        get_prediction("Ronkonkoma", LineType.LIRR, data_source=_static_source(snapshot), now=TUESDAY_8AM_MARCH)
    )
    # weather 55: 19.25 + 10 + 7.8 + 5.25 + 6.75 = 49.05
    assert result.overall == 49
    assert result.factors.weather == 55
    assert result.weather.temperature == "59°F"
    assert result.weather.description == "Overcast"
    assert result.weather.emoji == "⛅"
    assert result.weather.wind_speed == "12 km/h"
    assert result.weather.precipitation == 0.0


def test_non_success_response_through_open_meteo_yields_null_weather():
    class ErrorResp:
        def raise_for_status(self):
            raise requests.HTTPError("502 Bad Gateway")

        def json(self):
            return {}

    orig = open_meteo_client.session
    open_meteo_client.session = type("S", (), {"get": lambda *a, **k: ErrorResp()})()
    try:
        settings = Settings(weather_source="open_meteo")
        result = asyncio.run(
            get_prediction("Montauk", data_source=build_data_source(settings), now=TUESDAY_8AM_MARCH, settings=settings)
        )
    finally:
        open_meteo_client.session = orig

    assert result.weather is None
    assert result.factors.baseline == 50


def test_default_line_type_comes_from_settings():
    october_evening = dt.datetime(2025, 10, 14, 18, 0)
    settings = Settings(default_line_type="mnr")
    result = asyncio.run(
        get_prediction("Harlem Line", data_source=_failing_source(), now=october_evening, settings=settings)
    )
    assert result.factors.seasonal == 46


def test_unknown_line_does_not_fail():
    result = asyncio.run(get_prediction("Nowhere Branch", data_source=_failing_source(), now=TUESDAY_8AM_MARCH))
    assert result.factors.baseline == 40
    assert 0 <= result.overall <= 100


def test_concurrent_predictions_are_independent():
    async def run_all():
        return await asyncio.gather(
            get_prediction("Babylon", data_source=_failing_source(), now=TUESDAY_8AM_MARCH, chooser=_first),
            get_prediction("Oyster Bay", data_source=_failing_source(), now=TUESDAY_8AM_MARCH, chooser=_first),
        )

    babylon, oyster_bay = asyncio.run(run_all())
    assert babylon.factors.baseline == 48
    assert oyster_bay.factors.baseline == 30
    assert babylon.line == "Babylon"
    assert oyster_bay.line == "Oyster Bay"


def _predict_with_body(body_text):
    class TextResp:
        def raise_for_status(self):
            return None

        def json(self):
            return json.loads(body_text)

    orig = open_meteo_client.session
    open_meteo_client.session = type("S", (), {"get": lambda *a, **k: TextResp()})()
    try:
        settings = Settings(weather_source="open_meteo")
        return asyncio.run(
            get_prediction("Montauk", data_source=build_data_source(settings), now=TUESDAY_8AM_MARCH, settings=settings)
        )
    finally:
        open_meteo_client.session = orig


def test_deeply_nested_body_yields_null_weather():
    depth = 100000
    body = '{"current": {}, "hourly": {"x": ' + "[" * depth + "]" * depth + "}}"
    result = _predict_with_body(body)
    assert result.weather is None
    assert result.factors.weather == 30
    assert result.factors.baseline == 50


def test_non_object_hourly_still_scores_current_weather():
    result = _predict_with_body('{"current": {"temperature_2m": 10, "snowfall": 5}, "hourly": []}')
    # 30 + 25 (cold) + 40 (heavy snow)
    assert result.factors.weather == 95
    assert result.weather is not None
    assert result.weather.temperature == "50°F"
