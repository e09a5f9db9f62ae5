import logging
from uuid import UUID

from vigil_identity.domain.account import (
    RoleInUseError,
    RoleRepository,
    SystemRoleProtectedError,
)

logger = logging.getLogger(__name__)


class DeleteRoleCommand:
    """Command to delete a custom role that nobody holds."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(self, role_id: UUID) -> None:
        role = await self._role_repo.get(role_id)
        if role.is_system_role:
            raise SystemRoleProtectedError(role.name)

        member_count = await self._role_repo.count_members(role.id)
        if member_count:
            raise RoleInUseError(role.name, member_count)

        await self._role_repo.delete(role.id)
        logger.info("Role deleted: %s", role.name)
