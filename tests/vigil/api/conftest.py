"""Pytest fixtures for API tests.

The app runs against a throwaway SQLite file. ``TestClient`` drives each
request on its own event loop, so the engine uses ``NullPool`` and every
session opens a fresh connection on the loop that uses it.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tests.shared.fixtures.factories import STRONG_PASSWORD
from vigil.presentation.api.app import API_V1_PREFIX, create_app
from vigil.presentation.api.config import get_api_settings
from vigil.presentation.api.dependencies import get_db_session
from vigil_config.settings import Settings
from vigil_identity.application.commands import SeedSystemRolesCommand
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    RoleRepositorySQLAlchemy,
    create_tables,
)

SUPERADMIN_EMAIL = "root@acme.io"
SUPERADMIN_PASSWORD = "Bootstrap-Only-1!"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and cheap hashing."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        debug=True,
        bcrypt_rounds=4,
        superadmin_email=SUPERADMIN_EMAIL,
        superadmin_password=SecretStr(SUPERADMIN_PASSWORD),
        frontend_base_url="https://app.acme.io",
    )


def _setup_test_database(engine, session_maker):
    """Create tables and seed the system roles on a fresh event loop."""

    async def _setup():
        await create_tables(engine)
        async with session_maker() as session:
            await SeedSystemRolesCommand(RoleRepositorySQLAlchemy(session)).execute()
            await session.commit()

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_setup())
    finally:
        loop.close()


@pytest.fixture
def api_session_maker(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        poolclass=NullPool,
    )
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    _setup_test_database(engine, session_maker)
    return session_maker


@pytest.fixture
def test_client(api_settings, api_session_maker):
    """Create a test client over the SQLite test database.

    The lifespan does not run (no ``with`` block), so the app never touches
    the engine configured from the environment.
    """
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with api_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def registered_user_data() -> dict:
    return {
        "email": "jane@acme.io",
        "password": STRONG_PASSWORD,
        "first_name": "Jane",
        "last_name": "Doe",
    }


@pytest.fixture
def registered_user(test_client, registered_user_data, api_v1_prefix) -> dict:
    """Register the default user and return the registration payload."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/register",
        json=registered_user_data,
    )
    assert response.status_code == 201, (
        f"Registration failed: {response.status_code} - {response.text}"
    )
    return response.json()


@pytest.fixture
def auth_headers(
    test_client,
    registered_user,
    registered_user_data,
    api_v1_prefix,
) -> dict:
    """Get auth headers for the registered user."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/login",
        json={
            "email": registered_user_data["email"],
            "password": registered_user_data["password"],
        },
    )
    assert response.status_code == 200, response.text

    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin_headers(test_client, api_v1_prefix) -> dict:
    response = test_client.post(
        f"{api_v1_prefix}/auth/super-admin/login",
        json={"email": SUPERADMIN_EMAIL, "password": SUPERADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text

    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
