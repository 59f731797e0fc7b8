"""Shared fixtures for resourceful tests."""

import pytest

from resourceful.http.versioning import VersionResolver
from resourceful.routing.dispatcher import Dispatcher

from tests.controllers import LegacyController, PostsController


@pytest.fixture
def dispatcher():
    dispatcher = Dispatcher({'posts': PostsController, 'legacy': LegacyController()})
    VersionResolver().attach(dispatcher)
    return dispatcher
