import dataclasses
import logging
from typing import Optional
from uuid import UUID

from vigil_identity.application.commands.admin.create_role_command import (
    normalize_role_name,
)
from vigil_identity.domain.account import (
    Role,
    RoleAlreadyExistsError,
    RoleRepository,
    SystemRoleProtectedError,
)

logger = logging.getLogger(__name__)


class UpdateRoleCommand:
    """Command to rename or re-describe a custom role."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(
        self,
        role_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        level: Optional[int] = None,
    ) -> Role:
        role = await self._role_repo.get(role_id)
        if role.is_system_role:
            raise SystemRoleProtectedError(role.name)

        changes: dict[str, object] = {}
        if name is not None:
            new_name = normalize_role_name(name)
            if new_name != role.name:
                existing = await self._role_repo.find_by_name(new_name)
                if existing is not None:
                    raise RoleAlreadyExistsError(new_name)
                changes["name"] = new_name
        if description is not None:
            changes["description"] = description
        if level is not None:
            changes["level"] = level

        if not changes:
            return role

        updated = dataclasses.replace(role, **changes)
        await self._role_repo.save(updated)

        logger.info("Role updated: %s (%s)", updated.name, ", ".join(changes))
        return updated
