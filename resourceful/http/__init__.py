"""
HTTP Module
RESTful resource generation and action versioning
"""
from resourceful.http.resource import ActionTemplate, ResourceConfig, ResourceRegistrar
from resourceful.http.versioning import (
    Version,
    VersionedActionProvider,
    VersionResolver,
    RequestVersionState,
    versioned_name,
)

__all__ = [
    'ActionTemplate',
    'ResourceConfig',
    'ResourceRegistrar',
    'Version',
    'VersionedActionProvider',
    'VersionResolver',
    'RequestVersionState',
    'versioned_name',
]
