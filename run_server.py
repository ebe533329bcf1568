import os

import uvicorn

from skycast.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_unconfigured() -> None:
    """Log a clear message when the provider key is missing; searches will fail as network errors."""
    if not settings.openweather_api_key:
        logger.warning("SKYCAST_OPENWEATHER_API_KEY is not set; every search will end in a failed state.")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="skycast")
    warn_if_unconfigured()

    uvicorn.run(
        "skycast.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
