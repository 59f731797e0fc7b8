"""Tests for Controller action registration."""

import pytest

from resourceful.controllers import Controller, version
from resourceful.exceptions import ConfigurationError
from resourceful.http.versioning import ZERO, Version, VersionedActionProvider

from tests.controllers import PostsController


class CommentsController(Controller):
    def index(self, request, **params):
        return 'index'

    def index_1(self, request, **params):
        return 'index_1'

    @version('2.0', action='index')
    def index_with_replies(self, request, **params):
        return 'index_with_replies'

    def index_(self, request, **params):
        return 'malformed'

    def _helper(self):
        return 'private'


class TestControllerIndex:
    def test_is_a_versioned_action_provider(self):
        assert isinstance(PostsController(), VersionedActionProvider)

    def test_naming_convention(self):
        assert PostsController.actions()['show'] == {
            ZERO: 'show',
            Version(1, 0): 'show_1_0',
            Version(2, 3): 'show_2_3',
        }

    def test_major_only_suffix(self):
        assert CommentsController.actions()['index'][Version(1, 0)] == 'index_1'

    def test_decorated_method(self):
        assert CommentsController.actions()['index'][Version(2, 0)] == 'index_with_replies'

    def test_malformed_and_private_names_are_not_indexed(self):
        registered = {name for versions in CommentsController.actions().values() for name in versions.values()}
        assert 'index_' not in registered
        assert '_helper' not in registered

    def test_base_class_methods_are_not_actions(self):
        assert 'available_versions' not in PostsController.actions()
        assert 'actions' not in PostsController.actions()

    def test_available_versions_returns_bound_methods(self):
        controller = CommentsController()
        versions = controller.available_versions('index')

        assert set(versions) == {ZERO, Version(1, 0), Version(2, 0)}
        assert versions[Version(2, 0)](None) == 'index_with_replies'

    def test_unknown_action(self):
        assert CommentsController().available_versions('publish') == {}

    def test_subclass_inherits_actions(self):
        class AdminPostsController(PostsController):
            def show_3_0(self, request, **params):
                return 'admin'

        assert max(AdminPostsController.actions()['show']) == Version(3, 0)
        assert Version(3, 0) not in PostsController.actions()['show']

    def test_explicit_registration_wins(self):
        class ArticlesController(Controller):
            def show_2_0(self, request, **params):
                return 'convention'

            @version('2.0', action='show')
            def show_rewritten(self, request, **params):
                return 'explicit'

        assert ArticlesController.actions()['show'][Version(2, 0)] == 'show_rewritten'


class TestVersionDecorator:
    def test_default_action_is_name_prefix(self):
        class TagsController(Controller):
            @version('1.1')
            def show_legacy(self, request, **params):
                return 'legacy'

        assert TagsController.actions()['show'] == {Version(1, 1): 'show_legacy'}

    def test_default_action_uses_longest_indexed_prefix(self):
        class ReportsController(Controller):
            def list(self, request, **params):
                return 'list'

            def list_all(self, request, **params):
                return 'list_all'

            @version('2.0')
            def list_all_fast(self, request, **params):
                return 'list_all_fast'

        actions = ReportsController.actions()
        assert actions['list_all'] == {ZERO: 'list_all', Version(2, 0): 'list_all_fast'}
        assert actions['list'] == {ZERO: 'list'}

    def test_invalid_version(self):
        with pytest.raises(ConfigurationError):
            version('next')
