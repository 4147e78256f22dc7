"""
FastAPI dependency providers.

Routers never build connections themselves; they depend on these
providers so tests can swap in InMemoryDirectoryStore or fakes through
app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends

from app.auth.repository import UserRepository
from app.config import Settings, get_settings
from app.directory.repository import BusinessRepository, OpportunityRepository
from app.store.connection import Database
from app.store.directory import DirectoryStore


@lru_cache(maxsize=1)
def database_for(
    database_url: Optional[str],
    statement_timeout_ms: int,
    connect_timeout_s: int,
) -> Database:
    return Database(database_url, statement_timeout_ms, connect_timeout_s)


def get_database(settings: Settings = Depends(get_settings)) -> Database:
    return database_for(
        settings.database_url,
        settings.statement_timeout_ms,
        settings.connect_timeout_s,
    )


def get_directory_store(db: Database = Depends(get_database)) -> DirectoryStore:
    return DirectoryStore(db)


def get_business_repository(db: Database = Depends(get_database)) -> BusinessRepository:
    return BusinessRepository(db)


def get_opportunity_repository(db: Database = Depends(get_database)) -> OpportunityRepository:
    return OpportunityRepository(db)


def get_user_repository(db: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(db)
