"""Serverless entry point exporting the MovieMax FastAPI app."""

import logging

from moviemax.core.config import get_settings
from moviemax.main import app

settings = get_settings()

# Basic logging so fetch failures show up in the platform logs
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

logger.info("MovieMax API initialized (source=%s)", settings.source)

__all__ = ["app"]
