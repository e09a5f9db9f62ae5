"""SQLAlchemy implementation for vigil_identity persistence.

Provides:
- Base: Declarative base for identity models
- AccountModel, RoleModel, SecurityEventModel: table mappings
- AccountRepositorySQLAlchemy: the credential store
- RoleRepositorySQLAlchemy, SecurityEventRepositorySQLAlchemy
- build_engine / create_tables / drop_tables: engine and schema helpers
"""

from vigil_identity.infrastructure.persistence.sqlalchemy.init_db import (
    build_engine,
    create_tables,
    drop_tables,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    Base,
    RoleModel,
    SecurityEventModel,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    SecurityEventRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "Base",
    "RoleModel",
    "RoleRepositorySQLAlchemy",
    "SecurityEventModel",
    "SecurityEventRepositorySQLAlchemy",
    "build_engine",
    "create_tables",
    "drop_tables",
]
