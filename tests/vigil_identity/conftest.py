"""
Pytest configuration for vigil_identity tests.

Provides account and role fixtures plus the in-memory SQLite fixtures used
by the persistence flow tests.
"""

import pytest

from tests.shared.fixtures.database import (
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)
from tests.shared.fixtures.factories import TestAccountFactory, TestRoleFactory
from vigil_identity.domain.account import Account, Role

__all__ = [
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]


@pytest.fixture
def user_role() -> Role:
    return TestRoleFactory.user()


@pytest.fixture
def admin_role() -> Role:
    return TestRoleFactory.admin()


@pytest.fixture
def alice() -> Account:
    """Active, unverified account holding the user role."""
    return TestAccountFactory.alice()


@pytest.fixture
def super_admin_role() -> Role:
    return TestRoleFactory.super_admin()
