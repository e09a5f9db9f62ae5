"""
Pytest configuration for vigil_identity integration tests.

These run against PostgreSQL from Testcontainers and are skipped unless
``--run-integration`` (or ``RUN_INTEGRATION=1``) is given.
"""

from tests.shared.fixtures.database import (
    async_engine,
    pg_session_maker,
    postgres_container,
    postgres_url,
)

__all__ = [
    "async_engine",
    "pg_session_maker",
    "postgres_container",
    "postgres_url",
]
