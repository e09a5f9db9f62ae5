import logging

from vigil_identity.domain.account import SYSTEM_ROLES, Role, RoleRepository

logger = logging.getLogger(__name__)


class SeedSystemRolesCommand:
    """Command to create the built-in roles that are missing.

    Safe to run repeatedly; existing roles are left untouched.
    """

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(self) -> list[Role]:
        created: list[Role] = []
        for name, level, description in SYSTEM_ROLES:
            if await self._role_repo.find_by_name(name) is not None:
                continue
            role = Role(
                name=name,
                is_system_role=True,
                level=level,
                description=description,
            )
            await self._role_repo.save(role)
            created.append(role)
            logger.info("Seeded system role: %s", name)
        return created
