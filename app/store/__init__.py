"""
Directory Store

PostgreSQL persistence for users, businesses and opportunities, plus an
in-memory implementation of the engine's read interface.
"""

from .connection import Database
from .directory import (
    DirectoryStore,
    ACTIVE_PREDICATES,
    GROUPABLE_COLUMNS,
    check_column,
)
from .memory import InMemoryDirectoryStore
from .schema import init_schema, SCHEMA_VERSION

__all__ = [
    "Database",
    "DirectoryStore",
    "InMemoryDirectoryStore",
    "ACTIVE_PREDICATES",
    "GROUPABLE_COLUMNS",
    "check_column",
    "init_schema",
    "SCHEMA_VERSION",
]
