from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(log_level: str = "INFO") -> None:
    """Replace loguru's default handler with a single stderr sink."""

    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=LOG_FORMAT, colorize=True)
    logger.debug("Logging configured: level={}", log_level)
