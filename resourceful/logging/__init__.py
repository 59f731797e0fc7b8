"""
Logging Package
Structured logging for routing and dispatch

Provides a drop-in replacement for logging.getLogger that keeps every
framework logger under the 'resourceful' namespace.
"""
from resourceful.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

ROOT_LOGGER_NAME = 'resourceful'


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Module-based names (containing '.') are used as-is, so
    'resourceful.routing.router' inherits whatever LoggerConfig attached to
    'resourceful'. Bare names are nested under the framework logger.

    Args:
        name: Logger name (framework root logger if None)

    Returns:
        Logger instance

    Example:
        from resourceful.logging import getLogger
        logger = getLogger(__name__)

        logger.debug("Generated route", extra={'uri': '/posts'})
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if '.' not in name and name != ROOT_LOGGER_NAME:
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
