"""
Exceptions Package
Routing and dispatch errors plus centralized error reporting
"""
from resourceful.exceptions.custom import (
    FrameworkException,
    ConfigurationError,
    NotFoundException,
    ControllerNotFoundError,
    ActionNotFoundError,
    VersionNotFoundError,
)
from resourceful.exceptions.error_handler import ErrorHandler

__all__ = [
    # Error handling
    'ErrorHandler',

    # Custom exceptions
    'FrameworkException',
    'ConfigurationError',
    'NotFoundException',
    'ControllerNotFoundError',
    'ActionNotFoundError',
    'VersionNotFoundError',
]
