"""FastAPI dependency injection for the Vigil API.

Provides dependencies for:
- Database sessions
- Authentication (token claims and caller context from the bearer token)
- Service instances
"""

import logging
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vigil.presentation.api.config import get_api_settings
from vigil_auth import (
    JWTService,
    LockoutGuard,
    PasswordHashingService,
    PasswordPolicy,
    TokenClaims,
)
from vigil_config.settings import Settings, get_settings
from vigil_identity.application.context import UserContext
from vigil_identity.application.ports import AccountNotifier
from vigil_identity.application.services import (
    AuthenticationService,
    SuperAdminAuthenticator,
)
from vigil_identity.domain.account import RoleResolver
from vigil_identity.infrastructure.notifications import LoggingNotifier
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    SecurityEventRepositorySQLAlchemy,
    build_engine,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url and "///" in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.
    """
    return build_engine(get_database_url())


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    One session (and transaction) per request. Routers commit explicitly;
    anything not committed is rolled back when the session closes.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
        remember_me_expire_days=settings.jwt_remember_me_expire_days,
        action_token_expire_hours=settings.action_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_password_policy(settings: SettingsDep) -> PasswordPolicy:
    return PasswordPolicy(
        min_length=settings.password_min_length,
        history_size=settings.password_history_size,
    )


def get_lockout_guard(settings: SettingsDep) -> LockoutGuard:
    return LockoutGuard(
        threshold=settings.lockout_threshold,
        lockout_duration=timedelta(minutes=settings.lockout_duration_minutes),
    )


def get_notifier(settings: SettingsDep) -> AccountNotifier:
    # No mail transport is bundled; links are only logged in debug mode
    return LoggingNotifier(include_links=settings.debug)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]
PasswordPolicyDep = Annotated[PasswordPolicy, Depends(get_password_policy)]
LockoutGuardDep = Annotated[LockoutGuard, Depends(get_lockout_guard)]
NotifierDep = Annotated[AccountNotifier, Depends(get_notifier)]


async def get_authentication_service(  # NOQA: PLR0913
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
    password_policy: PasswordPolicyDep,
    lockout_guard: LockoutGuardDep,
    notifier: NotifierDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates registration, login, the password lifecycle
    and token verification.
    """
    role_repo = RoleRepositorySQLAlchemy(session)
    return AuthenticationService(
        account_repository=AccountRepositorySQLAlchemy(session),
        role_repository=role_repo,
        event_repository=SecurityEventRepositorySQLAlchemy(session),
        password_service=password_service,
        password_policy=password_policy,
        lockout_guard=lockout_guard,
        jwt_service=jwt_service,
        role_resolver=RoleResolver(role_repo),
        notifier=notifier,
        frontend_base_url=settings.frontend_base_url,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


async def get_super_admin_authenticator(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTServiceDep,
) -> SuperAdminAuthenticator:
    password = settings.superadmin_password
    return SuperAdminAuthenticator(
        email=settings.superadmin_email,
        password=password.get_secret_value() if password else None,
        jwt_service=jwt_service,
        event_repository=SecurityEventRepositorySQLAlchemy(session),
    )


SuperAdminAuth = Annotated[
    SuperAdminAuthenticator,
    Depends(get_super_admin_authenticator),
]


# -----------------------------------------------------------------------------
# Current Caller (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_claims(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    """
    FastAPI dependency returning the verified claims of the bearer token.

    Verification is stateless: no account lookup happens, so role changes
    take effect when the caller next logs in.

    Raises
    ------
    HTTPException
        401 if no bearer token is present
    TokenExpiredError, TokenInvalidError
        Mapped to 401 by the exception handlers
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.authorize(credentials.credentials)


# Type alias for injected claims
CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]


async def get_user_context(claims: CurrentClaims) -> UserContext:
    return UserContext.from_claims(claims)


# Type alias for the injected caller
CurrentUser = Annotated[UserContext, Depends(get_user_context)]


async def require_admin(user: CurrentUser) -> UserContext:
    """Require the is_admin claim."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# Type alias for admin user
AdminUser = Annotated[UserContext, Depends(require_admin)]


async def require_account(user: CurrentUser) -> UserContext:
    """Require a caller backed by a stored account."""
    if user.is_bootstrap_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not available for the bootstrap super administrator",
        )
    return user


AccountUser = Annotated[UserContext, Depends(require_account)]
