"""Loguru configuration for the waveplan command line."""

import sys

from loguru import logger

from waveplan.core.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings) -> None:
    """Configure loguru based on settings.

    Replaces the default handler with a stderr sink so that command
    output on stdout stays machine-readable.

    Args:
        settings: Settings providing level, debug flag and log file.
    """
    logger.remove()  # Remove default handler

    level = "DEBUG" if settings.debug else settings.log_level

    logger.add(
        lambda msg: sys.stderr.write(msg),
        level=level,
        format=LOG_FORMAT,
        colorize=True,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level,
            format=LOG_FORMAT,
        )
