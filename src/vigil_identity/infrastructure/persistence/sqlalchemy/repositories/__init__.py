# ruff: noqa: E501 - Long import paths in __init__.py re-exports
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (
    AccountRepositorySQLAlchemy,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories.role_repository import (
    RoleRepositorySQLAlchemy,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories.security_event_repository import (
    SecurityEventRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "RoleRepositorySQLAlchemy",
    "SecurityEventRepositorySQLAlchemy",
]
