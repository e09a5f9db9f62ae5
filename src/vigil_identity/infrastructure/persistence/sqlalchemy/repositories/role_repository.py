"""SQLAlchemy implementation of RoleRepository."""

import logging
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vigil_identity.domain.account import Role, RoleRepository
from vigil_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    account_roles,
)

logger = logging.getLogger(__name__)


class RoleRepositorySQLAlchemy(RoleRepository):
    """SQLAlchemy implementation of the RoleRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, role_id: UUID) -> Optional[Role]:
        model = await self._session.get(RoleModel, role_id)
        return self.map_to_domain(model) if model else None

    async def find_by_name(self, name: str) -> Optional[Role]:
        stmt = select(RoleModel).where(RoleModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self.map_to_domain(model) if model else None

    async def find_by_names(self, names: Iterable[str]) -> list[Role]:
        names = list(names)
        if not names:
            return []
        stmt = select(RoleModel).where(RoleModel.name.in_(names))
        result = await self._session.execute(stmt)
        return [self.map_to_domain(model) for model in result.scalars().all()]

    async def list_all(self) -> list[Role]:
        stmt = select(RoleModel).order_by(RoleModel.level.desc(), RoleModel.name)
        result = await self._session.execute(stmt)
        return [self.map_to_domain(model) for model in result.scalars().all()]

    async def save(self, role: Role) -> None:
        model = await self._session.get(RoleModel, role.id)
        if model is None:
            self._session.add(
                RoleModel(
                    id=role.id,
                    name=role.name,
                    description=role.description,
                    is_system_role=role.is_system_role,
                    level=role.level,
                ),
            )
            logger.debug("Created role: %s", role.name)
        else:
            model.name = role.name
            model.description = role.description
            model.is_system_role = role.is_system_role
            model.level = role.level
            logger.debug("Updated role: %s", role.name)
        await self._session.flush()

    async def delete(self, role_id: UUID) -> None:
        model = await self._session.get(RoleModel, role_id)
        if model:
            await self._session.delete(model)
            await self._session.flush()
            logger.info("Deleted role: %s", model.name)

    async def count_members(self, role_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(account_roles)
            .where(account_roles.c.role_id == role_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def models_for(self, roles: Iterable[Role]) -> list[RoleModel]:
        """Load the rows backing ``roles`` (used to sync account membership)."""
        ids = [role.id for role in roles]
        if not ids:
            return []
        stmt = select(RoleModel).where(RoleModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def map_to_domain(model: RoleModel) -> Role:
        return Role(
            id=model.id,
            name=model.name,
            description=model.description,
            is_system_role=model.is_system_role,
            level=model.level,
        )
