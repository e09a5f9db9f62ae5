from vigil.presentation.api.schemas.admin import (
    AssignRoleRequest,
    ChangeStatusRequest,
    CreateRoleRequest,
    RoleResponse,
    SecurityEventResponse,
    UpdateRoleRequest,
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

__all__ = [
    "AccountResponse",
    "AssignRoleRequest",
    "AuthResponse",
    "ChangePasswordRequest",
    "ChangeStatusRequest",
    "CreateRoleRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "MeResponse",
    "RegisterRequest",
    "RegistrationResponse",
    "ResetPasswordRequest",
    "RoleResponse",
    "SecurityEventResponse",
    "TokenResponse",
    "UpdateRoleRequest",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
]
