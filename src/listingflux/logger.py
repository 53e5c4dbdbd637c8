"""
Logging configuration for ListingFlux.

Only the package root logger ("listingflux") owns a handler; module loggers
are its children and propagate to it.
"""
import logging
import sys
from typing import Optional

from .config import Config

ROOT_LOGGER_NAME = "listingflux"

# Libraries that log every request or pool checkout at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "httpx", "openai", "sqlalchemy.engine", "waitress.queue")


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with a stdout handler.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    level = level or Config.LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # Replace rather than stack handlers when called twice
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format_string or Config.LOG_FORMAT))
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def quiet_third_party(level: int = logging.WARNING) -> None:
    """Raise the threshold of chatty dependency loggers."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


# Create default logger for the package
logger = setup_logger()
quiet_third_party()


def get_logger(name: str) -> logging.Logger:
    """
    Get a child of the package logger.

    Args:
        name: Module name (usually __name__); names outside the package
            (e.g. "__main__") are nested under it

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
