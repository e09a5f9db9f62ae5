# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for accounts, roles and security events."""

from vigil_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    account_roles,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.models.security_event_model import (
    SecurityEventModel,
)

__all__ = [
    "AccountModel",
    "Base",
    "RoleModel",
    "SecurityEventModel",
    "TimestampMixin",
    "account_roles",
]
