"""Routes package initialization."""

from . import (
    contact,
    events,
    health
)

__all__ = [
    'contact',
    'events',
    'health'
]
