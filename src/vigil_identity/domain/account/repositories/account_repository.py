"""Account repository interface (the credential store)."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from vigil_identity.domain.account.aggregates.account import Account
from vigil_identity.domain.account.exceptions import AccountNotFoundError
from vigil_identity.domain.account.value_objects import Email


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Implementations persist every mutated field of an account, role
    membership included, in a single ``save``. Loads with
    ``for_update=True`` must lock the row until the surrounding transaction
    ends so that concurrent login attempts cannot lose failure counts.
    """

    @abstractmethod
    async def find_by_id(
        self,
        account_id: UUID,
        *,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(
        self,
        email: Union[str, Email],
        *,
        for_update: bool = False,
    ) -> Optional[Account]:
        """Find an account by its email address (case-insensitive)."""

    @abstractmethod
    async def find_by_external_identity(
        self,
        provider: str,
        subject: str,
    ) -> Optional[Account]:
        """Find the account linked to a federated identity."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if an account exists with the given email."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Save or update an account.

        Raises
        ------
        EmailAlreadyRegisteredError
            If another account already uses the email address
        """

    @abstractmethod
    async def list_all(self) -> list[Account]:
        """List all accounts."""

    async def get(self, account_id: UUID, *, for_update: bool = False) -> Account:
        """Find an account by ID or raise AccountNotFoundError."""
        account = await self.find_by_id(account_id, for_update=for_update)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account
