"""Authentication router: registration, login and the password lifecycle."""

import logging

from fastapi import APIRouter, status

from vigil.presentation.api.dependencies import (
    AccountUser,
    AuthService,
    CurrentClaims,
    DBSession,
    SettingsDep,
    SuperAdminAuth,
)
from vigil.presentation.api.schemas.auth import (
    AccountResponse,
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    RegistrationResponse,
    ResetPasswordRequest,
    TokenResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from vigil_auth import (
    AccountLockedError,
    AccountNotActiveError,
    InvalidCredentialsError,
)
from vigil_identity.application.dtos import LoginResult

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(result: LoginResult) -> dict:
    return {
        "access_token": result.access_token,
        "token_type": result.token_type,
        "expires_in": result.expires_in,
        "roles": list(result.claims.roles),
        "is_admin": result.claims.is_admin,
        "is_super_admin": result.claims.is_super_admin,
    }


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account registered; verification email sent"},
        400: {"description": "Invalid email or weak password"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> RegistrationResponse:
    """
    Register with email and password.

    The account starts active but unverified and holds the ``user`` role.
    No access token is returned; log in afterwards.
    """
    result = await auth_service.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    await session.commit()

    return RegistrationResponse(
        account=AccountResponse.from_account(result.account),
        verification_token=result.verification_token if settings.debug else None,
    )


@router.post(
    "/login",
    summary="Authenticate with email and password",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account not active"},
        423: {"description": "Account locked"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Authenticate with email and password.

    The account is locked after repeated failed attempts; a locked account
    answers 423 with ``retry_after`` seconds.
    """
    try:
        result = await auth_service.login(
            email=request.email,
            password=request.password,
            remember_me=request.remember_me,
        )
    except (InvalidCredentialsError, AccountLockedError, AccountNotActiveError):
        await session.commit()  # Persist failure count and security events
        raise
    await session.commit()

    return AuthResponse(
        account=AccountResponse.from_account(result.account),
        **_token_response(result),
    )


@router.post(
    "/super-admin/login",
    summary="Authenticate as the configured super administrator",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials or super admin not configured"},
    },
)
async def super_admin_login(
    request: LoginRequest,
    authenticator: SuperAdminAuth,
    session: DBSession,
) -> TokenResponse:
    result = await authenticator.login(
        email=request.email,
        password=request.password,
        remember_me=request.remember_me,
    )
    await session.commit()
    return TokenResponse(**_token_response(result))


@router.get(
    "/me",
    summary="Get current caller",
    responses={
        200: {"description": "Claims of the presented token"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(claims: CurrentClaims) -> MeResponse:
    return MeResponse(
        subject=claims.subject,
        email=claims.email,
        roles=list(claims.roles),
        is_admin=claims.is_admin,
        is_super_admin=claims.is_super_admin,
    )


@router.post(
    "/change-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password",
    responses={
        204: {"description": "Password changed successfully"},
        400: {"description": "New password too weak or recently used"},
        401: {"description": "Current password incorrect or not authenticated"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    user: AccountUser,
    auth_service: AuthService,
    session: DBSession,
) -> None:
    """
    Change the caller's password.

    Tokens issued before the change stay valid until they expire.
    """
    await auth_service.change_password(
        account_id=user.account_id,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    await session.commit()


@router.post(
    "/forgot-password",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request password reset",
    responses={
        202: {"description": "If the email exists, a reset link has been sent"},
    },
)
async def forgot_password(
    request: ForgotPasswordRequest,
    auth_service: AuthService,
    session: DBSession,
) -> dict:
    """Request a password reset email."""
    await auth_service.request_password_reset(request.email)
    await session.commit()

    return {"message": "If the email exists, a reset link has been sent."}


@router.post(
    "/reset-password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset password with token",
    responses={
        204: {"description": "Password reset successfully"},
        400: {"description": "New password too weak or recently used"},
        401: {"description": "Invalid, used or expired token"},
    },
)
async def reset_password(
    request: ResetPasswordRequest,
    auth_service: AuthService,
    session: DBSession,
) -> None:
    """Reset password using a token from the reset email."""
    await auth_service.reset_password(request.token, request.new_password)
    await session.commit()


@router.post(
    "/verify-email",
    summary="Confirm an email address",
    responses={
        200: {"description": "Verified (or already verified)"},
        401: {"description": "Invalid or expired token"},
    },
)
async def verify_email(
    request: VerifyEmailRequest,
    auth_service: AuthService,
    session: DBSession,
) -> VerifyEmailResponse:
    result = await auth_service.verify_email(request.token)
    await session.commit()
    return VerifyEmailResponse(status=result.value)
