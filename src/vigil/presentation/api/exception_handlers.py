"""Centralized exception handlers for the FastAPI application.

Domain exceptions and authentication errors are mapped to HTTP responses
with a consistent error format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Some errors add fields: ``reasons`` for weak passwords, ``attempts_left``
for failed logins, ``retry_after`` and ``locked_until`` for locked accounts.

Usage:
    from vigil.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vigil_auth import (
    AccountLockedError,
    AccountNotActiveError,
    AuthError,
    InvalidCredentialsError,
    PasswordReusedError,
    TokenExpiredError,
    WeakPasswordError,
)
from vigil_auth.exceptions import InvalidTokenError
from vigil_identity.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_REUSED: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - authentication errors
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.ACCOUNT_NOT_ACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROLE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.ROLE_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    # 422 Unprocessable Entity - business rule violations
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SYSTEM_ROLE_PROTECTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.ROLE_IN_USE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    # 423 Locked
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolation):
        return status.HTTP_422_UNPROCESSABLE_ENTITY

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _auth_error_code(exc: AuthError) -> ErrorCode:  # NOQA: PLR0911
    if isinstance(exc, WeakPasswordError):
        return ErrorCode.WEAK_PASSWORD
    if isinstance(exc, PasswordReusedError):
        return ErrorCode.PASSWORD_REUSED
    if isinstance(exc, InvalidCredentialsError):
        return ErrorCode.INVALID_CREDENTIALS
    if isinstance(exc, AccountLockedError):
        return ErrorCode.ACCOUNT_LOCKED
    if isinstance(exc, AccountNotActiveError):
        return ErrorCode.ACCOUNT_NOT_ACTIVE
    if isinstance(exc, TokenExpiredError):
        return ErrorCode.TOKEN_EXPIRED
    if isinstance(exc, InvalidTokenError):
        return ErrorCode.TOKEN_INVALID
    return ErrorCode.INVALID_CREDENTIALS


def _auth_error_extras(exc: AuthError) -> dict[str, Any]:
    if isinstance(exc, WeakPasswordError):
        return {"reasons": exc.reasons}
    if isinstance(exc, InvalidCredentialsError) and exc.attempts_left is not None:
        return {"attempts_left": exc.attempts_left}
    if isinstance(exc, AccountLockedError):
        return {
            "retry_after": exc.retry_after,
            "locked_until": exc.locked_until.isoformat() if exc.locked_until else None,
        }
    return {}


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
            **extra,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Logs the full exception details for debugging while returning
        a safe, user-friendly message to the client.
        """
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        extra: dict[str, Any] = {}
        if isinstance(exc, ValidationError) and exc.field:
            extra["field"] = exc.field
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            **extra,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle authentication errors.

        Token and credential failures answer 401 with a Bearer challenge;
        locked accounts answer 423 with a Retry-After header.
        """
        code = _auth_error_code(exc)
        status_code = ERROR_CODE_TO_STATUS[code]

        logger.info(
            "Auth error on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            code.value,
        )

        headers: dict[str, str] | None = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = dict(BEARER_CHALLENGE)
        elif isinstance(exc, AccountLockedError) and exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=code.value,
            headers=headers,
            **_auth_error_extras(exc),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the handlers above. It ensures clients always receive a
        consistent error response format.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
