"""Authentication exceptions.

These exceptions are raised by the vigil_auth package and by the
authentication flows in vigil_identity. They should be caught and
translated by the presentation layer.
"""

from datetime import datetime


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token cannot be accepted."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Signature is valid but the token's time window has elapsed.

    Callers should suggest re-authentication rather than hard-reject.
    """

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenInvalidError(InvalidTokenError):
    """Signature mismatch, malformed payload, or wrong token purpose."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements.

    Every violated rule is listed in ``reasons`` so the caller can present
    a complete remediation list.
    """

    def __init__(
        self,
        reasons: list[str] | None = None,
        message: str = "Password does not meet requirements",
    ):
        self.reasons = list(reasons or [])
        if self.reasons:
            message = f"{message}: {', '.join(self.reasons)}"
        super().__init__(message)


class PasswordReusedError(AuthError):
    """Raised when a new password matches one of the recent passwords."""

    def __init__(self, message: str = "Cannot reuse a recent password"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect.

    Deliberately does not reveal which of the two was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid email or password",
        attempts_left: int | None = None,
    ):
        self.attempts_left = attempts_left
        super().__init__(message)


class AccountLockedError(AuthError):
    """Raised when an account is locked due to too many failed login attempts."""

    def __init__(
        self,
        message: str = "Account is locked due to too many failed login attempts",
        locked_until: datetime | None = None,
        retry_after: int | None = None,
    ):
        self.locked_until = locked_until
        self.retry_after = retry_after
        if locked_until:
            message = f"{message}. Try again after {locked_until.isoformat()}"
        super().__init__(message)


class AccountNotActiveError(AuthError):
    """Raised when an inactive or suspended account tries to authenticate."""

    def __init__(self, message: str = "Account is not active"):
        super().__init__(message)
