"""
Router
Main routing class that manages route registration, resolution and mounting
"""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import inspect

from sanic.exceptions import NotFound
from sanic.response import HTTPResponse, json

from resourceful.defaults import HTTP_METHOD_PARAM
from resourceful.exceptions import ErrorHandler, FrameworkException
from resourceful.logging import getLogger
from resourceful.routing.dispatcher import Dispatcher
from resourceful.routing.route import Route
from resourceful.routing.route_collection import RouteCollection

logger = getLogger(__name__)

ANY_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


class Router:
    def __init__(self, config=None):
        """
        Initialize the Router

        Args:
            config: ResourceConfig used by resource() (default: built-in templates)
        """
        from resourceful.http.resource import ResourceConfig, ResourceRegistrar

        self.routes = RouteCollection()
        self.config = config or ResourceConfig()
        self.registrar = ResourceRegistrar(self.config)
        self._patterns: Dict[str, str] = {}  # Global parameter patterns

    # =========================================================================
    # Route Registration Methods
    # =========================================================================

    def get(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a GET route"""
        return self.add_route(['GET'], uri, action)

    def post(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a POST route"""
        return self.add_route(['POST'], uri, action)

    def put(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a PUT route"""
        return self.add_route(['PUT'], uri, action)

    def patch(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a PATCH route"""
        return self.add_route(['PATCH'], uri, action)

    def delete(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a DELETE route"""
        return self.add_route(['DELETE'], uri, action)

    def any(self, uri: str, action: Union[str, Dict]) -> Route:
        """Register a route for all HTTP methods"""
        return self.add_route(ANY_METHODS, uri, action)

    def match(self, methods: List[str], uri: str, action: Union[str, Dict]) -> Route:
        """Register a route for specific HTTP methods"""
        return self.add_route(methods, uri, action)

    def add_route(self, methods: List[str], uri: str, action: Union[str, Dict]) -> Route:
        """
        Add a route to the collection

        Args:
            methods: HTTP methods
            uri: Route template
            action: 'controller@action' string or {'controller': ..., 'action': ...}
        """
        if isinstance(action, str) and '@' in action:
            controller, action_name = action.split('@', 1)
            params = {'controller': controller, 'action': action_name}
        elif isinstance(action, dict):
            params = dict(action)
        else:
            raise TypeError(f"Route action must be 'controller@action' or a dict, got {action!r}")

        params[HTTP_METHOD_PARAM] = [m.upper() for m in methods]
        return self.add(Route(uri, params))

    def add(self, route: Route) -> Route:
        """Add a built route, applying global parameter patterns"""
        for param, pattern in self._patterns.items():
            if param in route.get_parameter_names() and param not in route.get_wheres():
                route.where(param, pattern)
        return self.routes.add(route)

    # =========================================================================
    # Resource Routes
    # =========================================================================

    def resource(self, name: str, options: Optional[Dict[str, Any]] = None, **kwargs) -> List[Route]:
        """
        Register resource routes for a controller

        Args:
            name: Resource name (e.g., 'posts')
            options: only, except, types, scope, names

        Returns:
            List of created routes
        """
        routes = self.registrar.generate(name, options, **kwargs)
        for route in routes:
            self.add(route)
        return routes

    def api_resource(self, name: str, options: Optional[Dict[str, Any]] = None, **kwargs) -> List[Route]:
        """
        Register API resource routes (without add/edit)
        """
        routes = self.registrar.generate_api(name, options, **kwargs)
        for route in routes:
            self.add(route)
        return routes

    # =========================================================================
    # Global Parameter Patterns
    # =========================================================================

    def pattern(self, key: str, pattern: str):
        """
        Set a global parameter pattern

        Args:
            key: Parameter name
            pattern: Regex pattern
        """
        self._patterns[key] = pattern

    def patterns(self, patterns: Dict[str, str]):
        """Set multiple global parameter patterns"""
        self._patterns.update(patterns)

    # =========================================================================
    # Route Resolution
    # =========================================================================

    def get_routes(self) -> List[Route]:
        """Get all routes as a list"""
        return self.routes.get_routes()

    def get_collection(self) -> RouteCollection:
        """Get the route collection object"""
        return self.routes

    def get_route_by_name(self, name: str) -> Optional[Route]:
        """Get a route by name"""
        return self.routes.get_by_name(name)

    def has(self, name: str) -> bool:
        """Check if a named route exists"""
        return self.routes.has_named_route(name)

    def resolve(self, uri: str, method: str) -> Optional[Tuple[Route, Dict[str, Any]]]:
        """Find the route and bound params for a request path"""
        return self.routes.match(uri, method)

    # =========================================================================
    # Sanic Integration
    # =========================================================================

    def mount(self, app, dispatcher: Dispatcher, error_handler=None) -> int:
        """
        Register every route variant with a Sanic application

        Each optional-fragment variant becomes its own Sanic route whose
        handler dispatches through the given Dispatcher. Framework
        exceptions are rendered by the ErrorHandler.

        Returns:
            Number of Sanic routes added
        """
        error_handler = error_handler or ErrorHandler()
        app.exception(FrameworkException)(error_handler.handle_error)

        count = 0
        for index, route in enumerate(self.routes):
            handler = self._create_handler(route, dispatcher)
            for variant, uri in enumerate(route.get_compiled_uris()):
                name = f"{route.get_controller()}_{route.get_action()}_{index}_{variant}"
                app.add_route(handler, uri, methods=route.get_methods() or ANY_METHODS, name=name)
                count += 1

        logger.info(f"Mounted {count} routes", extra={'routes': len(self.routes)})
        return count

    @staticmethod
    def _create_handler(route: Route, dispatcher: Dispatcher) -> Callable:
        async def handler(request, **path_params):
            # Sanic's own params may cover whole segments ('12.json'); bind from the template
            params = route.match(request.path, request.method)
            if params is None:
                raise NotFound(f"Requested URL {request.path} not found")

            result = dispatcher.dispatch(params, request)
            if inspect.isawaitable(result):
                result = await result

            if isinstance(result, HTTPResponse):
                return result
            return json(result)

        handler.__name__ = f"{route.get_controller()}_{route.get_action()}"
        return handler
