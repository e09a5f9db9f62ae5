"""Role repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional
from uuid import UUID

from vigil_identity.domain.account.exceptions import RoleNotFoundError
from vigil_identity.domain.account.value_objects import Role


class RoleRepository(ABC):
    """Repository interface for roles."""

    @abstractmethod
    async def find_by_id(self, role_id: UUID) -> Optional[Role]:
        """Find a role by its ID."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Role]:
        """Find a role by its unique name."""

    @abstractmethod
    async def find_by_names(self, names: Iterable[str]) -> list[Role]:
        """Find all roles whose name is in ``names``."""

    @abstractmethod
    async def list_all(self) -> list[Role]:
        """List all roles, highest level first."""

    @abstractmethod
    async def save(self, role: Role) -> None:
        """Create or update a role."""

    @abstractmethod
    async def delete(self, role_id: UUID) -> None:
        """Delete a role by ID."""

    @abstractmethod
    async def count_members(self, role_id: UUID) -> int:
        """Count accounts holding the role."""

    async def get_by_name(self, name: str) -> Role:
        role = await self.find_by_name(name)
        if role is None:
            raise RoleNotFoundError(name)
        return role

    async def get(self, role_id: UUID) -> Role:
        role = await self.find_by_id(role_id)
        if role is None:
            raise RoleNotFoundError(str(role_id))
        return role
