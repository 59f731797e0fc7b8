"""Tests for RouteCollection lookups."""

from resourceful.routing.route import Route
from resourceful.routing.route_collection import RouteCollection


def make_collection():
    routes = RouteCollection()
    routes.add(Route('/posts', {'controller': 'posts', 'action': 'index', 'http:method': 'GET'}, name='posts.index'))
    routes.add(Route('/posts', {'controller': 'posts', 'action': 'create', 'http:method': 'POST'}, name='posts.create'))
    routes.add(Route('/ping', {'controller': 'health', 'action': 'ping'}))
    return routes


class TestRouteCollection:
    def test_lookup_by_name_and_action(self):
        routes = make_collection()
        assert routes.get_by_name('posts.create').get_action() == 'create'
        assert routes.get_by_action('posts@index').get_name() == 'posts.index'
        assert routes.get_by_action('posts@delete') is None

    def test_any_method_routes_join_every_lookup(self):
        routes = make_collection()
        assert [route.get_action() for route in routes.get_by_method('get')] == ['index', 'ping']
        assert [route.get_action() for route in routes.get_by_method('DELETE')] == ['ping']

    def test_match_selects_by_method(self):
        route, params = make_collection().match('/posts', 'POST')
        assert route.get_action() == 'create'
        assert params['controller'] == 'posts'

    def test_duplicate_name_points_to_latest(self):
        routes = make_collection()
        routes.add(Route('/articles', {'controller': 'articles', 'action': 'index', 'http:method': 'GET'}, name='posts.index'))

        assert len(routes) == 4
        assert routes.get_by_name('posts.index').get_uri() == '/articles'

    def test_clear(self):
        routes = make_collection()
        routes.clear()
        assert routes.count() == 0
        assert not routes.has_named_route('posts.index')
        assert routes.match('/ping', 'GET') is None

    def test_to_dict(self):
        summary = make_collection().to_dict()
        assert summary['total'] == 3
        assert summary['named_routes'] == 2
        assert summary['by_method'] == {'GET': 1, 'POST': 1, '*': 1}
