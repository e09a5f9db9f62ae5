from vigil_identity.domain.account.repositories.account_repository import (
    AccountRepository,
)
from vigil_identity.domain.account.repositories.role_repository import RoleRepository
from vigil_identity.domain.account.repositories.security_event_repository import (
    SecurityEventRepository,
)

__all__ = [
    "AccountRepository",
    "RoleRepository",
    "SecurityEventRepository",
]
