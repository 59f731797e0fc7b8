"""
Route Collection
Ordered route storage; the first registered route that matches wins
"""
from typing import Any, Dict, Iterator, List, Optional, Tuple

from resourceful.logging import getLogger
from resourceful.routing.route import Route

logger = getLogger(__name__)

ANY_METHOD = '*'


class RouteCollection:
    """
    Routes in registration order, indexed by name and HTTP method

    Routes without a method binding are filed under '*' and take part in
    every method lookup.
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._named: Dict[str, Route] = {}
        self._by_method: Dict[str, List[Route]] = {}

    def add(self, route: Route) -> Route:
        """Append a route; a later route with the same name replaces the index entry"""
        self._routes.append(route)

        name = route.get_name()
        if name:
            previous = self._named.get(name)
            if previous is not None:
                logger.warning(
                    f"Route name '{name}' registered twice",
                    extra={'existing_uri': previous.get_uri(), 'new_uri': route.get_uri()}
                )
            self._named[name] = route

        for method in route.get_methods() or [ANY_METHOD]:
            self._by_method.setdefault(method, []).append(route)

        return route

    def get_by_name(self, name: str) -> Optional[Route]:
        return self._named.get(name)

    def get_by_method(self, method: str) -> List[Route]:
        """Routes accepting a method, any-method routes included, in registration order"""
        candidates = self._by_method.get(method.upper(), []) + self._by_method.get(ANY_METHOD, [])
        wanted = {id(route) for route in candidates}
        return [route for route in self._routes if id(route) in wanted]

    def get_by_action(self, action: str) -> Optional[Route]:
        """First route bound to 'controller@action'"""
        return next((route for route in self._routes if route.get_action_name() == action), None)

    def match(self, uri: str, method: str) -> Optional[Tuple[Route, Dict[str, Any]]]:
        """
        Resolve a request path

        Returns:
            (route, bound params) for the first matching route, or None
        """
        for route in self.get_by_method(method):
            params = route.match(uri, method)
            if params is not None:
                return route, params
        return None

    def get_routes(self) -> List[Route]:
        return self._routes

    def has_named_route(self, name: str) -> bool:
        return name in self._named

    def count(self) -> int:
        return len(self._routes)

    def clear(self):
        self._routes.clear()
        self._named.clear()
        self._by_method.clear()

    def to_dict(self) -> Dict[str, Any]:
        """Summary used by route listings"""
        return {
            'total': len(self._routes),
            'routes': [route.to_dict() for route in self._routes],
            'by_method': {method: len(routes) for method, routes in self._by_method.items() if routes},
            'named_routes': len(self._named),
        }

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteCollection ({len(self._routes)} routes)>"
