"""Auth schemas and data structures.

These are simple data classes used for transferring token data between
components.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenPurpose(str, Enum):
    """What a signed token may be used for."""

    ACCESS = "access"
    VERIFY_EMAIL = "verify_email"
    PASSWORD_RESET = "password_reset"


@dataclass(frozen=True)
class TokenClaims:
    """Identity and role claims carried by an access token.

    Attributes
    ----------
    subject
        Account identifier (or the fixed super-admin subject)
    email
        The account's email address
    roles
        Role names held by the account
    is_admin
        True for admin and super_admin role holders
    is_super_admin
        True for super_admin role holders
    """

    subject: str
    email: str
    roles: tuple[str, ...] = ()
    is_admin: bool = False
    is_super_admin: bool = False

    def has_role(self, role_name: str) -> bool:
        return role_name in self.roles


@dataclass(frozen=True)
class ActionTokenPayload:
    """Decoded short-lived action token (email verification, password reset).

    ``binding`` pins the token to account state at issue time (for reset
    tokens: the password change timestamp) so it cannot be replayed after
    that state moves on.
    """

    subject: str
    email: str
    purpose: TokenPurpose
    expires_at: datetime
    binding: str | None = None
