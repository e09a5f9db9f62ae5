import logging
from typing import Optional, Union
from uuid import UUID

from vigil_identity.domain.account import (
    ROLE_SUPER_ADMIN,
    Account,
    AccountRepository,
    AccountStatus,
    SecurityEvent,
    SecurityEventRepository,
    SecurityEventType,
    SuperAdminRequiredError,
)
from vigil_identity.domain.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ChangeAccountStatusCommand:
    """Command to activate, deactivate or suspend an account.

    Accounts are never hard-deleted; deactivation is how they are retired.
    Only a super admin may change the status of a super admin account.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        event_repository: SecurityEventRepository,
    ):
        self._account_repo = account_repository
        self._event_repo = event_repository

    async def execute(
        self,
        account_id: UUID,
        status: Union[str, AccountStatus],
        performed_by: Optional[str] = None,
        actor_is_super_admin: bool = False,
    ) -> Account:
        try:
            new_status = AccountStatus(status)
        except ValueError as e:
            msg = f"Unknown account status: {status}"
            raise ValidationError(msg, field="status") from e
        account = await self._account_repo.get(account_id, for_update=True)
        if account.has_role(ROLE_SUPER_ADMIN) and not actor_is_super_admin:
            msg = "change the status of a super admin account"
            raise SuperAdminRequiredError(msg)
        previous = account.status
        if previous == new_status:
            return account

        account.change_status(new_status)
        await self._account_repo.save(account)
        await self._event_repo.record(
            SecurityEvent.for_account(
                SecurityEventType.STATUS_CHANGED,
                account.id,
                previous=previous.value,
                status=new_status.value,
                performed_by=performed_by,
            ),
        )

        logger.info(
            "Account %s status changed %s -> %s",
            account.email,
            previous.value,
            new_status.value,
        )
        return account
