"""Tests for dispatching and the filter pipeline."""

import pytest

from resourceful.exceptions import (
    ActionNotFoundError,
    ConfigurationError,
    ControllerNotFoundError,
    VersionNotFoundError,
)
from resourceful.routing.dispatcher import DispatchContext, Dispatcher

from tests.controllers import PostsController


class TestDispatch:
    def test_infers_highest_version(self, dispatcher):
        result = dispatcher.dispatch({'controller': 'posts', 'action': 'show', 'id': '12'})

        assert result['action'] == 'show_2_3'
        assert result['params'] == {'id': '12', 'version': '2.3'}

    def test_explicit_version(self, dispatcher):
        result = dispatcher.dispatch({'controller': 'posts', 'action': 'show', 'id': '12', 'version': '1.0'})
        assert result['action'] == 'show_1_0'

    def test_missing_version_does_not_invoke_base_action(self, dispatcher):
        calls = []
        dispatcher.apply_filter('call', lambda context, next_stage: calls.append(context) or next_stage(context))

        with pytest.raises(VersionNotFoundError):
            dispatcher.dispatch({'controller': 'posts', 'action': 'show', 'version': '9.9'})

        assert calls == []

    def test_unversioned_action(self, dispatcher):
        result = dispatcher.dispatch({'controller': 'posts', 'action': 'index'})
        assert result['action'] == 'index'

    def test_plain_controller_instance(self, dispatcher):
        result = dispatcher.dispatch({'controller': 'legacy', 'action': 'show', 'id': '3'})
        assert result == {'action': 'show', 'params': {'id': '3', 'version': '0.0'}}

    def test_request_is_passed_through(self):
        class EchoController:
            def index(self, request, **params):
                return request

        dispatcher = Dispatcher({'echo': EchoController})
        request = object()
        assert dispatcher.dispatch({'controller': 'echo', 'action': 'index'}, request) is request

    def test_reserved_params_are_not_arguments(self):
        context = DispatchContext({'controller': 'posts', 'action': 'show', 'http:method': 'GET', 'id': '1'})
        assert context.arguments() == {'id': '1'}

    def test_context_copies_params(self):
        params = {'controller': 'posts', 'action': 'show'}
        DispatchContext(params).params['action'] = 'show_1_0'
        assert params['action'] == 'show'


class TestDispatchErrors:
    def test_unknown_controller(self, dispatcher):
        with pytest.raises(ControllerNotFoundError) as excinfo:
            dispatcher.dispatch({'controller': 'comments', 'action': 'index'})
        assert excinfo.value.status_code == 404

    def test_missing_controller_param(self, dispatcher):
        with pytest.raises(ControllerNotFoundError):
            dispatcher.dispatch({'action': 'index'})

    def test_unknown_action(self, dispatcher):
        with pytest.raises(ActionNotFoundError):
            dispatcher.dispatch({'controller': 'posts', 'action': 'publish'})

    def test_private_action(self):
        class SecretController:
            def _token(self, request):
                return 'secret'

        with pytest.raises(ActionNotFoundError):
            Dispatcher({'secrets': SecretController}).dispatch({'controller': 'secrets', 'action': '_token'})

    def test_unknown_stage(self, dispatcher):
        with pytest.raises(ConfigurationError):
            dispatcher.apply_filter('render', lambda context, next_stage: next_stage(context))


class TestFilters:
    def test_filters_run_in_registration_order(self):
        order = []

        def make_filter(label):
            def filter_fn(context, next_stage):
                order.append(label)
                return next_stage(context)
            return filter_fn

        dispatcher = Dispatcher({'posts': PostsController})
        dispatcher.apply_filter('call', make_filter('call'))
        dispatcher.apply_filter('resolve', make_filter('resolve-1'))
        dispatcher.apply_filter('resolve', make_filter('resolve-2'))

        dispatcher.dispatch({'controller': 'posts', 'action': 'index'})
        assert order == ['resolve-1', 'resolve-2', 'call']

    def test_filter_can_short_circuit(self):
        dispatcher = Dispatcher({'posts': PostsController})
        dispatcher.apply_filter('resolve', lambda context, next_stage: 'cached')

        assert dispatcher.dispatch({'controller': 'posts', 'action': 'index'}) == 'cached'

    def test_filter_sees_resolved_controller(self):
        seen = []
        dispatcher = Dispatcher({'posts': PostsController})
        dispatcher.apply_filter('resolve', lambda context, next_stage: seen.append(context.controller) or next_stage(context))

        dispatcher.dispatch({'controller': 'posts', 'action': 'index'})
        assert isinstance(seen[0], PostsController)

    def test_controller_classes_are_instantiated_per_dispatch(self):
        seen = []
        dispatcher = Dispatcher({'posts': PostsController})
        dispatcher.apply_filter('call', lambda context, next_stage: seen.append(context.controller) or next_stage(context))

        dispatcher.dispatch({'controller': 'posts', 'action': 'index'})
        dispatcher.dispatch({'controller': 'posts', 'action': 'index'})
        assert seen[0] is not seen[1]

    def test_registration_normalizes_name(self):
        dispatcher = Dispatcher()
        dispatcher.register('Post', PostsController)
        assert dispatcher.has('posts')

    def test_get_filters_returns_copy(self, dispatcher):
        dispatcher.get_filters('call').clear()
        assert len(dispatcher.get_filters('call')) == 1
