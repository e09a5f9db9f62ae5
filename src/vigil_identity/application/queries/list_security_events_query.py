"""Recent security events of one account."""

from uuid import UUID

from vigil_identity.domain.account import (
    AccountRepository,
    SecurityEvent,
    SecurityEventRepository,
)

MAX_EVENT_LIMIT = 500


class ListSecurityEventsQuery:
    """Query to list an account's most recent security events."""

    def __init__(
        self,
        account_repository: AccountRepository,
        event_repository: SecurityEventRepository,
    ):
        self._account_repo = account_repository
        self._event_repo = event_repository

    async def execute(self, account_id: UUID, limit: int = 50) -> list[SecurityEvent]:
        # Raises AccountNotFoundError for unknown ids rather than returning []
        account = await self._account_repo.get(account_id)
        limit = max(1, min(limit, MAX_EVENT_LIMIT))
        return await self._event_repo.list_for_account(account.id, limit=limit)
