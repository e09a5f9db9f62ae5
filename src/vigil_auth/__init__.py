"""Vigil Auth - Generic authentication infrastructure.

This package provides authentication building blocks that are independent
of how accounts are stored. It handles:
- Password hashing (bcrypt)
- Password strength and reuse rules
- Account lockout state transitions
- JWT token creation and verification

Architecture:
    vigil_auth/
    ├── services/           # Pure logic (hashing, policy, lockout, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from vigil_auth import JWTService, LockoutGuard, PasswordPolicy
"""

from vigil_auth.exceptions import (
    AccountLockedError,
    AccountNotActiveError,
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordReusedError,
    TokenExpiredError,
    TokenInvalidError,
    WeakPasswordError,
)
from vigil_auth.schemas import ActionTokenPayload, TokenClaims, TokenPurpose
from vigil_auth.services import (
    JWTService,
    LockoutGuard,
    LockoutState,
    PasswordHashingService,
    PasswordPolicy,
)

__all__ = [
    # Services
    "JWTService",
    "LockoutGuard",
    "LockoutState",
    "PasswordHashingService",
    "PasswordPolicy",
    # Schemas
    "ActionTokenPayload",
    "TokenClaims",
    "TokenPurpose",
    # Exceptions
    "AccountLockedError",
    "AccountNotActiveError",
    "AuthError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordReusedError",
    "TokenExpiredError",
    "TokenInvalidError",
    "WeakPasswordError",
]
