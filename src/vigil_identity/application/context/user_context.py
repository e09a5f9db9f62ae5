"""Request-scoped identity derived from verified token claims."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from vigil_auth.schemas import TokenClaims
from vigil_auth.services import SUPER_ADMIN_SUBJECT


@dataclass(frozen=True)
class UserContext:
    """Immutable context for the current authenticated caller."""

    subject: str
    email: str
    roles: tuple[str, ...] = ()
    is_admin: bool = False
    is_super_admin: bool = False

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> UserContext:
        return cls(
            subject=claims.subject,
            email=claims.email,
            roles=claims.roles,
            is_admin=claims.is_admin,
            is_super_admin=claims.is_super_admin,
        )

    @property
    def is_bootstrap_super_admin(self) -> bool:
        return self.subject == SUPER_ADMIN_SUBJECT

    @property
    def account_id(self) -> UUID | None:
        """Stored account id, or None for the bootstrap super administrator."""
        if self.is_bootstrap_super_admin:
            return None
        return UUID(self.subject)

    def __str__(self) -> str:
        return f"UserContext({self.email})"
