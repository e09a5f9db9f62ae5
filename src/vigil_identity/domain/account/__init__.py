"""Account domain: identity, credentials, lockout state and roles.

This domain handles:
- Account aggregate (email, password hash and history, lockout, status)
- Roles and role membership
- Security events
"""

from vigil_identity.domain.account.aggregates import Account
from vigil_identity.domain.account.entities import SecurityEvent, SecurityEventType
from vigil_identity.domain.account.exceptions import (
    AccountNotFoundError,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
    RoleAlreadyExistsError,
    RoleInUseError,
    RoleNotFoundError,
    SuperAdminRequiredError,
    SystemRoleProtectedError,
)
from vigil_identity.domain.account.repositories import (
    AccountRepository,
    RoleRepository,
    SecurityEventRepository,
)
from vigil_identity.domain.account.services import RoleResolver
from vigil_identity.domain.account.value_objects import (
    DEFAULT_ROLE,
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    SYSTEM_ROLES,
    AccountStatus,
    Email,
    ExternalIdentity,
    Role,
)

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountStatus",
    "DEFAULT_ROLE",
    "Email",
    "EmailAlreadyRegisteredError",
    "ExternalIdentity",
    "InvalidEmailError",
    "ROLE_ADMIN",
    "ROLE_SUPER_ADMIN",
    "ROLE_USER",
    "Role",
    "RoleAlreadyExistsError",
    "RoleInUseError",
    "RoleNotFoundError",
    "RoleRepository",
    "RoleResolver",
    "SYSTEM_ROLES",
    "SecurityEvent",
    "SecurityEventRepository",
    "SecurityEventType",
    "SuperAdminRequiredError",
    "SystemRoleProtectedError",
]
