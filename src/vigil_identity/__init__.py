"""Vigil Identity - Accounts, authentication flows and role administration.

This package handles all account-related concerns:
- Account aggregate (credentials, password history, lockout state)
- Authentication (registration, login, password change and reset)
- Email verification
- Role-based access control (roles, assignment, admin commands)
- Security event log

Generic building blocks (hashing, password policy, lockout transitions,
JWT) come from vigil_auth; this package wires them to stored accounts.
"""

from vigil_identity.application.commands import (
    AssignRoleCommand,
    ChangeAccountStatusCommand,
    CreateRoleCommand,
    DeleteRoleCommand,
    ForceUnlockCommand,
    RevokeRoleCommand,
    SeedSystemRolesCommand,
    UpdateRoleCommand,
)
from vigil_identity.application.context import UserContext
from vigil_identity.application.dtos import (
    EmailVerificationResult,
    LoginResult,
    RegistrationResult,
)
from vigil_identity.application.ports import AccountNotifier
from vigil_identity.application.services import (
    AuthenticationService,
    SuperAdminAuthenticator,
)
from vigil_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    AccountStatus,
    Email,
    EmailAlreadyRegisteredError,
    InvalidEmailError,
    Role,
    RoleAlreadyExistsError,
    RoleInUseError,
    RoleNotFoundError,
    RoleRepository,
    RoleResolver,
    SecurityEvent,
    SecurityEventRepository,
    SecurityEventType,
    SystemRoleProtectedError,
)

__all__ = [
    # Domain - Account
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountStatus",
    "Email",
    "EmailAlreadyRegisteredError",
    "InvalidEmailError",
    "Role",
    "RoleAlreadyExistsError",
    "RoleInUseError",
    "RoleNotFoundError",
    "RoleRepository",
    "RoleResolver",
    "SecurityEvent",
    "SecurityEventRepository",
    "SecurityEventType",
    "SystemRoleProtectedError",
    # Application Context
    "UserContext",
    # Ports
    "AccountNotifier",
    # Results
    "EmailVerificationResult",
    "LoginResult",
    "RegistrationResult",
    # Application Services
    "AuthenticationService",
    "SuperAdminAuthenticator",
    # Commands
    "AssignRoleCommand",
    "ChangeAccountStatusCommand",
    "CreateRoleCommand",
    "DeleteRoleCommand",
    "ForceUnlockCommand",
    "RevokeRoleCommand",
    "SeedSystemRolesCommand",
    "UpdateRoleCommand",
]
