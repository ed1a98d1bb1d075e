import unittest

from rail_risk.data_sources import open_meteo_client
from rail_risk.data_sources.base import CallableWeatherDataSource, WeatherFetchError
from rail_risk.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source


class DummySettings:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        # provide defaults if not passed
        self.weather_source = getattr(self, "weather_source", DEFAULT_SOURCE_NAME)
        self.weather_api_url = getattr(self, "weather_api_url", "https://api.open-meteo.com/v1/forecast")


class TestDataSourceFactory(unittest.TestCase):
    def test_build_open_meteo_default(self):
        ds = build_data_source(DummySettings(weather_source="open_meteo"))
        self.assertIsInstance(ds, CallableWeatherDataSource)

    def test_open_meteo_uses_configured_url(self):
        seen = {}

        class Resp:
            def raise_for_status(self):
                pass

            def json(self):
                return {"current": {"temperature_2m": 1.0}}

        class Session:
            def get(self, url, params=None, timeout=None):
                seen["url"] = url
                return Resp()

        orig = open_meteo_client.session
        open_meteo_client.session = Session()
        try:
            ds = build_data_source(DummySettings(weather_api_url="http://mirror.local/v1/forecast"))
            snapshot = ds.fetch_weather_current(0, 0)
        finally:
            open_meteo_client.session = orig

        self.assertEqual(seen["url"], "http://mirror.local/v1/forecast")
        self.assertEqual(snapshot.temperature, 1.0)

    def test_disabled_source_always_fails(self):
        ds = build_data_source(DummySettings(weather_source="disabled"))
        with self.assertRaises(WeatherFetchError):
            ds.fetch_weather_current(0, 0)

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(weather_source="unknown-source"))


if __name__ == "__main__":
    unittest.main()
