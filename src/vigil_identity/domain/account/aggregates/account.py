"""Account aggregate: identity, credentials and lockout state."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Union
from uuid import UUID, uuid4

from vigil_auth.services.lockout_guard import LockoutState
from vigil_identity.domain.account.value_objects import (
    AccountStatus,
    Email,
    ExternalIdentity,
    Role,
)
from vigil_identity.domain.shared.time import utc_now

DEFAULT_HISTORY_SIZE = 5


class Account:
    """
    Account aggregate root.

    Holds the current password hash together with the hashes of the most
    recently set passwords (the current one included), the failed-login
    counter and lock expiry, the soft lifecycle status and role membership.
    The email address never changes after creation.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        first_name: str = "",
        last_name: str = "",
        password_hash: str | None = None,
        password_history: Iterable[str] | None = None,
        password_changed_at: datetime | None = None,
        failed_login_count: int = 0,
        locked_until: datetime | None = None,
        status: Union[str, AccountStatus] = AccountStatus.ACTIVE,
        email_verified: bool = False,
        roles: Iterable[Role] | None = None,
        external_identity: ExternalIdentity | None = None,
        last_login_at: datetime | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id or uuid4()
        self._first_name = first_name
        self._last_name = last_name
        self._password_hash = password_hash
        self._password_history = list(password_history or [])
        self._password_changed_at = password_changed_at
        self._failed_login_count = failed_login_count
        self._locked_until = locked_until
        self._status = AccountStatus(status)
        self._email_verified = email_verified
        self._roles: set[Role] = set(roles or [])
        self._external_identity = external_identity
        self._last_login_at = last_login_at
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def has_local_password(self) -> bool:
        return self._password_hash is not None

    @property
    def password_history(self) -> tuple[str, ...]:
        return tuple(self._password_history)

    @property
    def password_changed_at(self) -> datetime | None:
        return self._password_changed_at

    @property
    def failed_login_count(self) -> int:
        return self._failed_login_count

    @property
    def locked_until(self) -> datetime | None:
        return self._locked_until

    @property
    def status(self) -> AccountStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == AccountStatus.ACTIVE

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(self._roles)

    @property
    def role_names(self) -> frozenset[str]:
        return frozenset(role.name for role in self._roles)

    @property
    def external_identity(self) -> ExternalIdentity | None:
        return self._external_identity

    @property
    def last_login_at(self) -> datetime | None:
        return self._last_login_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # Password lifecycle

    def set_password(
        self,
        password_hash: str,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """Replace the current password and rotate the history."""
        self._password_hash = password_hash
        self.append_password_history(password_hash, history_size)
        self._password_changed_at = utc_now()
        self._touch()

    def append_password_history(
        self,
        password_hash: str,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """Push a hash, evicting the oldest entries beyond ``history_size``."""
        self._password_history.append(password_hash)
        if len(self._password_history) > history_size:
            del self._password_history[: len(self._password_history) - history_size]

    def reuse_candidates(self) -> tuple[str, ...]:
        """Hashes a new password must not match.

        Accounts created before history tracking have an empty history, so
        the current hash is checked as well.
        """
        if self._password_hash and self._password_hash not in self._password_history:
            return (*self._password_history, self._password_hash)
        return tuple(self._password_history)

    # Lockout

    @property
    def lockout_state(self) -> LockoutState:
        return LockoutState(
            failed_login_count=self._failed_login_count,
            locked_until=self._locked_until,
        )

    def apply_lockout_state(self, state: LockoutState) -> None:
        if (
            state.failed_login_count == self._failed_login_count
            and state.locked_until == self._locked_until
        ):
            return
        self._failed_login_count = state.failed_login_count
        self._locked_until = state.locked_until
        self._touch()

    def record_login(self) -> None:
        self._last_login_at = utc_now()
        self._touch()

    # Verification and lifecycle

    def mark_email_verified(self) -> bool:
        """Return False when the address was already verified (no-op)."""
        if self._email_verified:
            return False
        self._email_verified = True
        self._touch()
        return True

    def change_status(self, status: Union[str, AccountStatus]) -> None:
        self._status = AccountStatus(status)
        self._touch()

    def link_external_identity(self, identity: ExternalIdentity) -> None:
        self._external_identity = identity
        self._touch()

    # Roles

    def assign_role(self, role: Role) -> bool:
        if role in self._roles:
            return False
        self._roles.add(role)
        self._touch()
        return True

    def revoke_role(self, role: Role) -> bool:
        if role not in self._roles:
            return False
        self._roles.discard(role)
        self._touch()
        return True

    def has_role(self, role_name: str) -> bool:
        return role_name in self.role_names

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        first_name: str = "",
        last_name: str = "",
        roles: Iterable[Role] | None = None,
    ) -> Account:
        """New locally-authenticated account: active and unverified."""
        account = cls(
            email=email,
            first_name=first_name,
            last_name=last_name,
            roles=roles,
        )
        account.set_password(password_hash)
        return account

    @classmethod
    def create_external(
        cls,
        email: Union[str, Email],
        external_identity: ExternalIdentity,
        first_name: str = "",
        last_name: str = "",
        roles: Iterable[Role] | None = None,
    ) -> Account:
        """New federated account: no local password, email verified upstream."""
        return cls(
            email=email,
            first_name=first_name,
            last_name=last_name,
            email_verified=True,
            roles=roles,
            external_identity=external_identity,
        )

    @classmethod
    def reconstitute(cls, **kwargs: Any) -> Account:
        return cls(**kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Account(id={self._id}, email={self._email.value})"
