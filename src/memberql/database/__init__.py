"""
Database module for memberql
"""

from .connection import (
    DatabaseNotInitializedError,
    create_all,
    get_async_session,
    get_session_factory,
    init_database,
)

__all__ = [
    "DatabaseNotInitializedError",
    "create_all",
    "get_async_session",
    "get_session_factory",
    "init_database",
]
