import logging

from vigil_identity.domain.account import (
    Role,
    RoleAlreadyExistsError,
    RoleRepository,
)
from vigil_identity.domain.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_ROLE_NAME_LENGTH = 50


def normalize_role_name(name: str) -> str:
    normalized = name.strip().lower()
    if not normalized:
        msg = "Role name cannot be empty"
        raise ValidationError(msg, field="name")
    if len(normalized) > MAX_ROLE_NAME_LENGTH:
        msg = f"Role name cannot exceed {MAX_ROLE_NAME_LENGTH} characters"
        raise ValidationError(msg, field="name")
    return normalized


class CreateRoleCommand:
    """Command to create a custom (non-system) role."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(
        self,
        name: str,
        description: str = "",
        level: int = 0,
    ) -> Role:
        name = normalize_role_name(name)
        if await self._role_repo.find_by_name(name) is not None:
            raise RoleAlreadyExistsError(name)

        role = Role(name=name, description=description, level=level)
        await self._role_repo.save(role)

        logger.info("Role created: %s (level %d)", role.name, role.level)
        return role
