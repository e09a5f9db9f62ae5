"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    pg_session_maker,
    postgres_container,
    postgres_url,
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)
from tests.shared.fixtures.factories import (
    TestAccountFactory,
    TestRoleFactory,
    build_auth_service,
)

__all__ = [
    "async_engine",
    "pg_session_maker",
    "postgres_container",
    "postgres_url",
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
    "TestAccountFactory",
    "TestRoleFactory",
    "build_auth_service",
]
