"""Loguru sink setup for the API process."""

import sys

from loguru import logger

from src.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Replace the default loguru sink with one stderr sink at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )
