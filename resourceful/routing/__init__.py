"""
Routing Package
Core routing classes

Resource route generation lives in resourceful.http.resource
(RESTful CRUD is an HTTP concern); Router.resource() wraps it.
"""
from resourceful.routing.route import Route
from resourceful.routing.route_collection import RouteCollection
from resourceful.routing.dispatcher import Dispatcher, DispatchContext
from resourceful.routing.router import Router

__all__ = [
    'Route',
    'RouteCollection',
    'Dispatcher',
    'DispatchContext',
    'Router',
]
