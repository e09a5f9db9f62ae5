"""Results returned by the authentication flows."""

from dataclasses import dataclass
from enum import Enum

from vigil_auth.schemas import TokenClaims
from vigil_identity.domain.account import Account


@dataclass(frozen=True)
class RegistrationResult:
    """A freshly registered account and its email verification token.

    Registration never hands out an access token; the caller logs in
    separately.
    """

    account: Account
    verification_token: str


@dataclass(frozen=True)
class LoginResult:
    account: Account | None
    access_token: str
    claims: TokenClaims
    expires_in: int

    @property
    def token_type(self) -> str:
        return "bearer"


class EmailVerificationResult(str, Enum):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
