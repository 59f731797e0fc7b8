"""
Controllers Package
Base controller with versioned action registration
"""
from resourceful.controllers.controller import Controller, version

__all__ = [
    'Controller',
    'version',
]
