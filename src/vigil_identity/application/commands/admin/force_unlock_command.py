import logging
from typing import Optional
from uuid import UUID

from vigil_auth import LockoutGuard
from vigil_identity.domain.account import (
    Account,
    AccountRepository,
    SecurityEvent,
    SecurityEventRepository,
    SecurityEventType,
)

logger = logging.getLogger(__name__)


class ForceUnlockCommand:
    """Command to clear an account's lock and failed-login counter."""

    def __init__(
        self,
        account_repository: AccountRepository,
        event_repository: SecurityEventRepository,
        lockout_guard: LockoutGuard,
    ):
        self._account_repo = account_repository
        self._event_repo = event_repository
        self._lockout_guard = lockout_guard

    async def execute(
        self,
        account_id: UUID,
        performed_by: Optional[str] = None,
    ) -> Account:
        account = await self._account_repo.get(account_id, for_update=True)
        previous = account.lockout_state

        account.apply_lockout_state(self._lockout_guard.force_unlock(previous))
        await self._account_repo.save(account)
        await self._event_repo.record(
            SecurityEvent.for_account(
                SecurityEventType.ACCOUNT_UNLOCKED,
                account.id,
                performed_by=performed_by,
                failed_login_count=previous.failed_login_count,
            ),
        )

        logger.info("Account unlocked by %s: %s", performed_by, account.email)
        return account
