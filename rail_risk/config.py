"""Service configuration pulled from environment variables via pydantic."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rail_risk.domain import LineType
from rail_risk.tables import (
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_TIMEZONE,
    OPEN_METEO_WEATHER_URL,
)
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the rail risk service."""
    model_config = SettingsConfigDict(env_prefix="RAILRISK_", extra="ignore")

    weather_source: str = "open_meteo"  # options: open_meteo, disabled
    weather_api_url: str = OPEN_METEO_WEATHER_URL
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE
    timezone: str = DEFAULT_TIMEZONE
    request_timeout_seconds: float | None = 10.0
    default_line_type: LineType = LineType.LIRR
    log_level: str = "INFO"

    @field_validator("weather_api_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the forecast URL so query strings attach cleanly."""
        return str(v).rstrip("/")

    @field_validator("timezone", mode="after")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Fail at startup on an unknown IANA zone name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone '{v}'") from exc
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
