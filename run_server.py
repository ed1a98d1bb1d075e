import os

import uvicorn

from rail_risk.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="rail_risk_api")
    logger.info("Starting server", extra={"weather_source": settings.weather_source})

    uvicorn.run(
        "rail_risk.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8080)),
        reload=False,
    )
