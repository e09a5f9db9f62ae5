"""Value objects for the account domain."""

from vigil_identity.domain.account.value_objects.account_status import AccountStatus
from vigil_identity.domain.account.value_objects.email import Email
from vigil_identity.domain.account.value_objects.external_identity import (
    ExternalIdentity,
)
from vigil_identity.domain.account.value_objects.role import (
    DEFAULT_ROLE,
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    SYSTEM_ROLES,
    Role,
)

__all__ = [
    "AccountStatus",
    "DEFAULT_ROLE",
    "Email",
    "ExternalIdentity",
    "ROLE_ADMIN",
    "ROLE_SUPER_ADMIN",
    "ROLE_USER",
    "Role",
    "SYSTEM_ROLES",
]
