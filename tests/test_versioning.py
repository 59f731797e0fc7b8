"""Tests for version parsing, the naming convention and the resolver filters."""

import pytest

from resourceful.exceptions import VersionNotFoundError
from resourceful.http.versioning import (
    ZERO,
    RequestVersionState,
    Version,
    VersionResolver,
    split_versioned_name,
    versioned_name,
)
from resourceful.routing.dispatcher import DispatchContext

from tests.controllers import LegacyController, PostsController


class TestVersion:
    @pytest.mark.parametrize("value,expected", [
        ("1.2", Version(1, 2)),
        ("2", Version(2, 0)),
        (3, Version(3, 0)),
        (" 0.1 ", Version(0, 1)),
    ])
    def test_parse(self, value, expected):
        assert Version.parse(value) == expected

    @pytest.mark.parametrize("value", ["", "v1", "1.x", "1.2.3", None, True, -1])
    def test_parse_rejects_non_numeric(self, value):
        assert Version.parse(value) is None

    def test_numeric_ordering(self):
        assert Version(2, 10) > Version(2, 9)
        assert Version(10, 0) > Version(9, 9)
        assert max([Version(1, 0), Version(2, 3), ZERO]) == Version(2, 3)

    def test_suffix_and_str(self):
        assert Version(2, 1).suffix() == "2_1"
        assert str(Version(2, 1)) == "2.1"

    def test_zero_is_falsy(self):
        assert not ZERO
        assert Version(0, 1)


class TestNamingConvention:
    def test_versioned_name(self):
        assert versioned_name("show", Version(2, 1)) == "show_2_1"
        assert versioned_name("show", ZERO) == "show"

    def test_custom_separator(self):
        assert versioned_name("show", Version(1, 0), "x") == "showx1x0"

    @pytest.mark.parametrize("name,expected", [
        ("show", ("show", ZERO)),
        ("show_1_2", ("show", Version(1, 2))),
        ("show_2", ("show", Version(2, 0))),
        ("list_all_3_1", ("list_all", Version(3, 1))),
        ("list_all", ("list_all", ZERO)),
    ])
    def test_split(self, name, expected):
        assert split_versioned_name(name) == expected

    @pytest.mark.parametrize("name", ["show_", "show_1_"])
    def test_split_malformed(self, name):
        assert split_versioned_name(name) == ("show", None)


class TestRequestVersionState:
    def test_prefers_requested(self):
        state = RequestVersionState("show", inferred=Version(2, 0), requested=Version(1, 0))
        assert state.version == Version(1, 0)

    def test_method_name_uses_registered_name(self):
        state = RequestVersionState("show", methods={Version(2, 0): "show_2"})
        assert state.method_name(Version(2, 0)) == "show_2"
        assert state.method_name(Version(1, 5)) == "show_1_5"


def run_resolve(resolver, controller, params):
    context = DispatchContext(params)
    context.controller = controller
    resolver.resolve(context, lambda ctx: ctx)
    return context


def run_both(resolver, controller, params):
    context = run_resolve(resolver, controller, params)
    return resolver.call(context, lambda ctx: ctx)


class ShowOnlyController(PostsController):
    show_1_0 = None
    show_2_3 = None


class MalformedController(PostsController):
    show_1_0 = None
    show_2_3 = None

    def show_(self, request, **params):
        return {'action': 'show_'}


class OnlyMalformedController(MalformedController):
    show = None


class TestResolveFilter:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.resolver = VersionResolver()

    def test_infers_zero_without_candidates(self):
        context = run_resolve(self.resolver, ShowOnlyController(), {'action': 'show'})
        assert context.version_state.inferred == ZERO
        assert context.version_state.requested is None

    def test_infers_highest_version(self):
        context = run_resolve(self.resolver, PostsController(), {'action': 'show'})
        assert context.version_state.inferred == Version(2, 3)

    def test_does_not_rewrite_action(self):
        context = run_resolve(self.resolver, PostsController(), {'action': 'show'})
        assert context.params['action'] == 'show'

    def test_explicit_version_present(self):
        context = run_resolve(self.resolver, PostsController(), {'action': 'show', 'version': '1.0'})
        assert context.version_state.requested == Version(1, 0)
        assert context.version_state.inferred is None

    def test_explicit_version_absent(self):
        with pytest.raises(VersionNotFoundError) as excinfo:
            run_resolve(self.resolver, PostsController(), {'action': 'show', 'version': '9.9'})

        assert excinfo.value.status_code == 404
        assert excinfo.value.version == '9.9'

    def test_explicit_non_numeric_version(self):
        with pytest.raises(VersionNotFoundError):
            run_resolve(self.resolver, PostsController(), {'action': 'show', 'version': 'latest'})

    def test_malformed_suffix_does_not_crash(self):
        context = run_resolve(self.resolver, MalformedController(), {'action': 'show'})
        assert context.version_state.inferred == ZERO

    def test_only_malformed_candidate_falls_back_to_zero(self):
        context = run_resolve(self.resolver, OnlyMalformedController(), {'action': 'show'})
        assert context.version_state.inferred == ZERO

    def test_plain_handler_exposes_version_zero(self):
        context = run_resolve(self.resolver, LegacyController(), {'action': 'show'})
        assert context.version_state.inferred == ZERO

    def test_returns_next_stage_result(self):
        context = DispatchContext({'action': 'show'})
        context.controller = PostsController()
        assert self.resolver.resolve(context, lambda ctx: 'next') == 'next'


class TestCallFilter:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.resolver = VersionResolver()

    def test_rewrites_to_inferred_version(self):
        context = run_both(self.resolver, PostsController(), {'action': 'show'})
        assert context.params['action'] == 'show_2_3'
        assert context.params['version'] == '2.3'

    def test_rewrites_to_requested_version(self):
        context = run_both(self.resolver, PostsController(), {'action': 'show', 'version': '1.0'})
        assert context.params['action'] == 'show_1_0'

    def test_zero_keeps_base_action(self):
        context = run_both(self.resolver, ShowOnlyController(), {'action': 'show'})
        assert context.params['action'] == 'show'

    def test_rewrite_is_idempotent(self):
        context = run_both(self.resolver, PostsController(), {'action': 'show'})
        self.resolver.call(context, lambda ctx: ctx)
        assert context.params['action'] == 'show_2_3'

    def test_without_resolve_state(self):
        context = DispatchContext({'action': 'show', 'version': '1.2'})
        self.resolver.call(context, lambda ctx: ctx)
        self.resolver.call(context, lambda ctx: ctx)
        assert context.params['action'] == 'show_1_2'

    def test_custom_param_and_separator(self):
        resolver = VersionResolver(param='api', separator='_')
        context = run_both(resolver, PostsController(), {'action': 'show', 'api': '1.0'})
        assert context.params['action'] == 'show_1_0'
