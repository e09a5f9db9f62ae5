"""Authentication services (pure logic, no persistence)."""

from vigil_auth.services.jwt_service import (
    SUPER_ADMIN_ROLE,
    SUPER_ADMIN_SUBJECT,
    JWTService,
)
from vigil_auth.services.lockout_guard import LockoutGuard, LockoutState
from vigil_auth.services.password_policy import PasswordPolicy
from vigil_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "LockoutGuard",
    "LockoutState",
    "PasswordHashingService",
    "PasswordPolicy",
    "SUPER_ADMIN_ROLE",
    "SUPER_ADMIN_SUBJECT",
]
