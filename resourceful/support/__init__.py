"""
Support Package
String helpers used across routing
"""
from resourceful.support.str import Str

__all__ = [
    'Str',
]
