"""Security event repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from vigil_identity.domain.account.entities import SecurityEvent


class SecurityEventRepository(ABC):
    """Append-only store of security events."""

    @abstractmethod
    async def record(self, event: SecurityEvent) -> None:
        """Append an event."""

    @abstractmethod
    async def list_for_account(
        self,
        account_id: UUID,
        limit: int = 50,
    ) -> list[SecurityEvent]:
        """Most recent events for an account, newest first."""

    @abstractmethod
    async def list_for_account(
        self,
        account_id: UUID,
        limit: int = 50,
    ) -> list[SecurityEvent]:
        """Most recent events for an account, newest first."""
