"""List roles query."""

from vigil_identity.domain.account import Role, RoleRepository


class ListRolesQuery:
    """Query to list every role, highest level first."""

    def __init__(self, role_repository: RoleRepository):
        self._role_repo = role_repository

    async def execute(self) -> list[Role]:
        return await self._role_repo.list_all()
