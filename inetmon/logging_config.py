"""Logging configuration for the Internet Stability Monitor."""

import logging
import os
import sys

LOG_LEVEL_ENV = "INETMON_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_log_level(value: str | None) -> int:
    """Map a level name to a logging constant, falling back to INFO."""
    if not value:
        return logging.INFO
    return _LEVELS.get(value.strip().upper(), logging.INFO)


def configure_logging(level: str | None = None) -> None:
    """Configure application-wide logging on stderr.

    The level comes from the level argument if given, otherwise from the
    INETMON_LOG_LEVEL environment variable (default: INFO).

    Examples:
        $ python -m inetmon
        $ INETMON_LOG_LEVEL=DEBUG python -m inetmon
    """
    log_level = resolve_log_level(level or os.environ.get(LOG_LEVEL_ENV))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging configured: level=%s", logging.getLevelName(log_level))
