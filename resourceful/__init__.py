"""
Resourceful
RESTful resource routing with versioned action dispatch for Sanic
"""
from resourceful.routing import Dispatcher, DispatchContext, Route, RouteCollection, Router
from resourceful.http import (
    ActionTemplate,
    ResourceConfig,
    ResourceRegistrar,
    Version,
    VersionedActionProvider,
    VersionResolver,
)
from resourceful.controllers import Controller, version
from resourceful.exceptions import (
    ActionNotFoundError,
    ConfigurationError,
    ControllerNotFoundError,
    ErrorHandler,
    FrameworkException,
    VersionNotFoundError,
)

__all__ = [
    # Routing
    'Route',
    'RouteCollection',
    'Router',
    'Dispatcher',
    'DispatchContext',
    # Resources
    'ActionTemplate',
    'ResourceConfig',
    'ResourceRegistrar',
    # Versioning
    'Version',
    'VersionedActionProvider',
    'VersionResolver',
    'Controller',
    'version',
    # Errors
    'ErrorHandler',
    'FrameworkException',
    'ConfigurationError',
    'ControllerNotFoundError',
    'ActionNotFoundError',
    'VersionNotFoundError',
]
