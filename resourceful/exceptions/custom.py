"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"
    error_code: Optional[str] = None

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class ConfigurationError(FrameworkException):
    """
    Configuration error exception

    Raised at route generation time for an empty resource name or a
    malformed action template. Not a request-time failure.

    Example:
        raise ConfigurationError("Action template 'publish' is missing a method")
    """
    status_code = 500
    message = "Invalid routing configuration"
    error_code = 'configuration_error'


class NotFoundException(FrameworkException):
    """
    Resource not found exception

    Raised when a requested resource doesn't exist

    Example:
        raise NotFoundException("User not found")
    """
    status_code = 404
    message = "Resource not found"
    error_code = 'not_found'


class ControllerNotFoundError(NotFoundException):
    """
    Raised when a matched route names a controller that is not registered

    Example:
        raise ControllerNotFoundError("Controller 'posts' is not registered")
    """
    message = "Controller not found"
    error_code = 'controller_not_found'

    def __init__(self, controller: str, message: Optional[str] = None):
        self.controller = controller
        super().__init__(message or f"Controller '{controller}' is not registered")


class ActionNotFoundError(NotFoundException):
    """
    Raised when the controller has no public method for the resolved action

    Example:
        raise ActionNotFoundError('posts', 'publish')
    """
    message = "Action not found"
    error_code = 'action_not_found'

    def __init__(self, controller: str, action: str, message: Optional[str] = None):
        self.controller = controller
        self.action = action
        super().__init__(message or f"Action '{action}' not found on controller '{controller}'")


class VersionNotFoundError(NotFoundException):
    """
    Raised when a request asks for an API version no method implements

    Example:
        raise VersionNotFoundError('show', '9.9')
    """
    message = "Requested version not found"
    error_code = 'version_not_found'

    def __init__(self, action: str, version: str, message: Optional[str] = None):
        self.action = action
        self.version = version
        super().__init__(message or f"Version '{version}' of action '{action}' is not implemented")
