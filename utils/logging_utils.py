"""Logging setup for the rail risk service.

Modules take a tagged logger (``get_tagged_logger(__name__, tag=...)``);
``run_server.py`` calls ``setup_logging`` once. Until then the bootstrap
config below still gives timestamps and levels.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Mapping, Optional

BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_JOB_NAME = "rail_risk"

logging.basicConfig(level=logging.INFO, format=BOOTSTRAP_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

_CONFIGURED: bool = False


class RecordFieldsFilter(logging.Filter):
    """Fill in `tag` and `job_name` so the formatter never hits a missing field."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            record.tag = record.name.split(".")[-1] if record.name else "-"
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


def build_logging_config(
    *,
    level: str | int = "INFO",
    job_name: Optional[str] = DEFAULT_JOB_NAME,
) -> Mapping[str, Any]:
    """dictConfig mapping: one stdout handler with tag/job fields."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "record_fields": {"()": RecordFieldsFilter, "job_name": job_name},
        },
        "formatters": {
            "standard": {"format": DEFAULT_LOG_FORMAT, "datefmt": DEFAULT_DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["record_fields"],
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    job_name: Optional[str] = DEFAULT_JOB_NAME,
    override_existing: bool = False,
) -> None:
    """Apply the config once per process; later calls need ``override_existing``."""
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    logging.config.dictConfig(build_logging_config(level=level, job_name=job_name))
    _CONFIGURED = True


def get_tagged_logger(name: str, *, tag: Optional[str] = None) -> logging.LoggerAdapter:
    """LoggerAdapter whose records carry `tag` (default: last segment of `name`)."""
    if tag is None:
        tag = name.split(".")[-1]
    return logging.LoggerAdapter(logging.getLogger(name), {"tag": tag})
