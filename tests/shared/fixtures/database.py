"""
Database fixtures for persistence tests.

Two flavours:

- ``sqlite_session_maker``: in-memory SQLite via aiosqlite, fast and always
  available. Used by the flow tests and the API tests.
- ``postgres_container`` / ``async_engine`` / ``pg_session_maker``:
  an ephemeral PostgreSQL from Testcontainers, for behavior SQLite cannot
  show (row locks). Only use these from ``@pytest.mark.integration`` tests.

Usage:
    from tests.shared.fixtures.database import sqlite_session_maker

    async def test_something(sqlite_session_maker):
        async with sqlite_session_maker() as session:
            repo = AccountRepositorySQLAlchemy(session)
            await repo.save(account)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

from vigil_identity.application.commands import SeedSystemRolesCommand
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    RoleRepositorySQLAlchemy,
    build_engine,
    create_tables,
    drop_tables,
)

# Use same Postgres version as production
POSTGRES_IMAGE = "postgres:16-alpine"

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


async def _seed_roles(session_maker: async_sessionmaker[AsyncSession]) -> None:
    async with session_maker() as session:
        await SeedSystemRolesCommand(RoleRepositorySQLAlchemy(session)).execute()
        await session.commit()


# -----------------------------------------------------------------------------
# SQLite (in-memory)
# -----------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    Fresh in-memory database per test.

    ``build_engine`` pins a single shared connection for ``:memory:`` URLs,
    so every session of the test sees the same tables.
    """
    engine = build_engine(SQLITE_MEMORY_URL)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session_maker(sqlite_engine):
    """Session factory over the in-memory database, system roles seeded."""
    session_maker = async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await _seed_roles(session_maker)
    return session_maker


@pytest_asyncio.fixture
async def sqlite_session(sqlite_session_maker):
    """A single session for tests that stay within one transaction."""
    async with sqlite_session_maker() as session:
        yield session
        await session.rollback()


# -----------------------------------------------------------------------------
# PostgreSQL (Testcontainers)
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def postgres_container():
    """
    Start a PostgreSQL container for the test session.

    The container is shared across all tests in the session for performance.
    Each test gets a clean database state via table drop/create.
    """
    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_url(postgres_container) -> str:
    # Testcontainers may return postgresql+psycopg2:// or postgresql://
    connection_url = postgres_container.get_connection_url()
    async_url = connection_url.replace(
        "postgresql+psycopg2://",
        "postgresql+asyncpg://",
    )
    return async_url.replace("postgresql://", "postgresql+asyncpg://")


@pytest_asyncio.fixture
async def async_engine(postgres_url):
    """
    Async engine on the test container with a clean schema.

    Function-scoped so the engine lives on the test's event loop.
    """
    engine = create_async_engine(
        postgres_url,
        echo=False,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )
    await drop_tables(engine)
    await create_tables(engine)

    yield engine

    await drop_tables(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def pg_session_maker(async_engine):
    """Session factory over the container database, system roles seeded."""
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await _seed_roles(session_maker)
    return session_maker
