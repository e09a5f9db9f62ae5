"""SQLAlchemy implementation of AccountRepository."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vigil_identity.domain.account import (
    Account,
    AccountRepository,
    Email,
    EmailAlreadyRegisteredError,
    ExternalIdentity,
)
from vigil_identity.domain.shared.time import ensure_tz_aware
from vigil_identity.infrastructure.persistence.sqlalchemy.models import AccountModel
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories._utils import (
    aware_or_none,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.repositories.role_repository import (  # noqa: E501
    RoleRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface.

    ``for_update`` loads issue ``SELECT ... FOR UPDATE``. SQLite has no row
    locks and ignores the clause; PostgreSQL serializes concurrent logins
    against the same account on it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._roles = RoleRepositorySQLAlchemy(session)

    async def find_by_id(
        self,
        account_id: UUID,
        *,
        for_update: bool = False,
    ) -> Optional[Account]:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        model = await self._fetch_one(stmt, for_update=for_update)
        return self._map_to_domain(model) if model else None

    async def find_by_email(
        self,
        email: Union[str, Email],
        *,
        for_update: bool = False,
    ) -> Optional[Account]:
        email_value = email.value if isinstance(email, Email) else Email(email).value
        stmt = select(AccountModel).where(AccountModel.email == email_value)
        model = await self._fetch_one(stmt, for_update=for_update)
        return self._map_to_domain(model) if model else None

    async def find_by_external_identity(
        self,
        provider: str,
        subject: str,
    ) -> Optional[Account]:
        stmt = select(AccountModel).where(
            AccountModel.external_provider == provider.strip().lower(),
            AccountModel.external_subject == subject,
        )
        model = await self._fetch_one(stmt, for_update=True)
        return self._map_to_domain(model) if model else None

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        email_value = email.value if isinstance(email, Email) else Email(email).value
        stmt = select(AccountModel.id).where(AccountModel.email == email_value)
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def save(self, account: Account) -> None:
        existing = await self._session.get(AccountModel, account.id)
        role_models = await self._roles.models_for(account.roles)

        try:
            if existing:
                self._update_model(existing, account)
                existing.roles = role_models
                logger.debug("Updated account: %s", account.id)
            else:
                model = self._map_to_model(account)
                model.roles = role_models
                self._session.add(model)
                logger.info(
                    "Created account: %s (email: %s)",
                    account.id,
                    account.email,
                )

            await self._session.flush()
        except IntegrityError as e:
            if "email" in str(e.orig).lower():
                raise EmailAlreadyRegisteredError(account.email) from e
            raise

    async def list_all(self) -> list[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _fetch_one(
        self,
        stmt: Select,
        *,
        for_update: bool,
    ) -> Optional[AccountModel]:
        if for_update:
            # Refresh rows already in the identity map with the locked values
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        external_identity = None
        if model.external_provider and model.external_subject:
            external_identity = ExternalIdentity(
                provider=model.external_provider,
                subject=model.external_subject,
            )
        return Account.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            password_hash=model.password_hash,
            password_history=list(model.password_history or []),
            password_changed_at=aware_or_none(model.password_changed_at),
            failed_login_count=model.failed_login_count,
            locked_until=aware_or_none(model.locked_until),
            status=model.status,
            email_verified=model.email_verified,
            roles=[RoleRepositorySQLAlchemy.map_to_domain(r) for r in model.roles],
            external_identity=external_identity,
            last_login_at=aware_or_none(model.last_login_at),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        model = AccountModel(id=account.id, created_at=account.created_at)
        self._update_model(model, account)
        return model

    def _update_model(self, model: AccountModel, account: Account) -> None:
        model.email = account.email
        model.first_name = account.first_name
        model.last_name = account.last_name
        model.password_hash = account.password_hash
        model.password_history = list(account.password_history)
        model.password_changed_at = account.password_changed_at
        model.failed_login_count = account.failed_login_count
        model.locked_until = account.locked_until
        model.status = account.status.value
        model.email_verified = account.email_verified
        identity = account.external_identity
        model.external_provider = identity.provider if identity else None
        model.external_subject = identity.subject if identity else None
        model.last_login_at = account.last_login_at
        model.updated_at = account.updated_at
