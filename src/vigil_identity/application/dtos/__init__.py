from vigil_identity.application.dtos.auth_results import (
    EmailVerificationResult,
    LoginResult,
    RegistrationResult,
)

__all__ = [
    "EmailVerificationResult",
    "LoginResult",
    "RegistrationResult",
]
