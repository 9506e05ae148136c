"""Database bootstrap utilities for the form builder service.

Exposes engine construction and the migrations runner that applies SQL files
from the project's migrations/ directory. No ORM models leak into routes.
"""

from formbuilder.db.base import StorageError, get_engine, reset_engine
from formbuilder.db.migrations_runner import apply_migrations

__all__ = [
    "StorageError",
    "get_engine",
    "reset_engine",
    "apply_migrations",
]
