from vigil_identity.application.services.authentication_service import (
    AuthenticationService,
)
from vigil_identity.application.services.super_admin_authenticator import (
    SuperAdminAuthenticator,
)

__all__ = [
    "AuthenticationService",
    "SuperAdminAuthenticator",
]
