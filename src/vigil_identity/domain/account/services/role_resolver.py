"""Role resolution: account membership to role names and coarse flags."""

from collections.abc import Iterable
from typing import Optional

from vigil_auth.schemas import TokenClaims
from vigil_identity.domain.account.aggregates.account import Account
from vigil_identity.domain.account.exceptions import RoleNotFoundError
from vigil_identity.domain.account.repositories import RoleRepository
from vigil_identity.domain.account.value_objects import (
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
    Role,
)


class RoleResolver:
    """Derives role names and authorization flags from role membership.

    The flag helpers are pure. ``resolve`` needs a role repository and turns
    role names arriving at the boundary into ``Role`` objects once, so the
    rest of the code never compares raw strings against stored roles.

    The bootstrap super administrator never passes through here; its claims
    are fixed by ``JWTService.issue_super_admin``.
    """

    def __init__(self, role_repository: Optional[RoleRepository] = None):
        self._role_repo = role_repository

    def roles_of(self, account: Account) -> tuple[str, ...]:
        return tuple(sorted(account.role_names))

    def is_admin(self, roles: Iterable[str]) -> bool:
        names = set(roles)
        return ROLE_ADMIN in names or ROLE_SUPER_ADMIN in names

    def is_super_admin(self, roles: Iterable[str]) -> bool:
        return ROLE_SUPER_ADMIN in set(roles)

    def claims_for(self, account: Account) -> TokenClaims:
        roles = self.roles_of(account)
        return TokenClaims(
            subject=str(account.id),
            email=account.email,
            roles=roles,
            is_admin=self.is_admin(roles),
            is_super_admin=self.is_super_admin(roles),
        )

    async def resolve(self, names: Iterable[str]) -> list[Role]:
        """Look up every named role.

        Raises
        ------
        RoleNotFoundError
            For the first name with no stored role
        """
        if self._role_repo is None:
            msg = "RoleResolver.resolve requires a role repository"
            raise RuntimeError(msg)
        wanted = list(dict.fromkeys(name.strip().lower() for name in names))
        roles = await self._role_repo.find_by_names(wanted)
        found = {role.name: role for role in roles}
        for name in wanted:
            if name not in found:
                raise RoleNotFoundError(name)
        return [found[name] for name in wanted]
