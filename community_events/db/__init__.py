"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    StoreError,
    ConnectionError,
    SessionError,
    CommitError,
    get_database
)

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',

    # Exceptions
    'StoreError',
    'ConnectionError',
    'SessionError',
    'CommitError',

    # Global instance
    'get_database',
]
