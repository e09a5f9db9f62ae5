from typing import Optional
from uuid import UUID

from vigil_identity.domain.account import (
    ROLE_SUPER_ADMIN,
    Account,
    AccountRepository,
    RoleRepository,
    SecurityEvent,
    SecurityEventRepository,
    SecurityEventType,
    SuperAdminRequiredError,
)


class RevokeRoleCommand:
    """Command to take a role away from an account.

    Revoking a role the account does not hold is a no-op.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        role_repository: RoleRepository,
        event_repository: SecurityEventRepository,
    ):
        self._account_repo = account_repository
        self._role_repo = role_repository
        self._event_repo = event_repository

    async def execute(
        self,
        account_id: UUID,
        role_name: str,
        performed_by: Optional[str] = None,
        actor_is_super_admin: bool = False,
    ) -> Account:
        role_name = role_name.strip().lower()
        if role_name == ROLE_SUPER_ADMIN and not actor_is_super_admin:
            raise SuperAdminRequiredError("revoke the super_admin role")
        account = await self._account_repo.get(account_id, for_update=True)
        role = await self._role_repo.get_by_name(role_name)

        if account.revoke_role(role):
            await self._account_repo.save(account)
            await self._event_repo.record(
                SecurityEvent.for_account(
                    SecurityEventType.ROLE_REVOKED,
                    account.id,
                    role=role.name,
                    performed_by=performed_by,
                ),
            )
        return account
