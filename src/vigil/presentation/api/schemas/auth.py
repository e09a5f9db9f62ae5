"""Authentication schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from vigil_identity.domain.account import Account


class RegisterRequest(BaseModel):
    """Request schema for account registration.

    Strength rules are enforced by the password policy so that every
    violated rule is reported at once; only the upper bound is checked here.
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., max_length=72, description="Password")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Correct-Horse-42",
                "first_name": "Ada",
                "last_name": "Lovelace",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: str
    password: str
    remember_me: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Correct-Horse-42",
                "remember_me": False,
            },
        },
    )


class ChangePasswordRequest(BaseModel):
    """Request schema for changing the caller's password."""

    current_password: str
    new_password: str = Field(..., max_length=72)


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset email."""

    email: str


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password with a token."""

    token: str
    new_password: str = Field(..., max_length=72)


class VerifyEmailRequest(BaseModel):
    token: str


class VerifyEmailResponse(BaseModel):
    status: str = Field(..., description="verified or already_verified")


class AccountResponse(BaseModel):
    """Response schema for account data."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    roles: list[str]
    status: str
    email_verified: bool
    created_at: datetime
    last_login_at: datetime | None = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            roles=sorted(account.role_names),
            status=account.status.value,
            email_verified=account.email_verified,
            created_at=account.created_at,
            last_login_at=account.last_login_at,
        )


class RegistrationResponse(BaseModel):
    """Response schema for registration.

    No access token is issued; the client logs in separately. The
    verification token is echoed only in debug mode, otherwise it travels
    by email.
    """

    account: AccountResponse
    verification_token: str | None = None


class TokenResponse(BaseModel):
    """Response schema for token data."""

    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int
    roles: list[str]
    is_admin: bool
    is_super_admin: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.xxx",
                "token_type": "bearer",
                "expires_in": 86400,
                "roles": ["user"],
                "is_admin": False,
                "is_super_admin": False,
            },
        },
    )


class AuthResponse(TokenResponse):
    """Response schema for login."""

    account: AccountResponse


class MeResponse(BaseModel):
    """Identity of the caller as carried by the access token."""

    subject: str
    email: str
    roles: list[str]
    is_admin: bool
    is_super_admin: bool
