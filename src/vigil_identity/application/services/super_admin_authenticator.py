"""Bootstrap super administrator login.

The super administrator is configured through settings rather than stored
as an account. It exists so an operator can always get in (to unlock
accounts or seed roles) even when every stored account is locked out.
"""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING, Optional

from vigil_auth import InvalidCredentialsError, JWTService
from vigil_identity.application.dtos import LoginResult
from vigil_identity.domain.account import SecurityEvent, SecurityEventType

if TYPE_CHECKING:
    from vigil_identity.domain.account import SecurityEventRepository

logger = logging.getLogger(__name__)


class SuperAdminAuthenticator:
    """Checks the configured super administrator credential pair.

    Never consults the lockout guard or the role store. When no credential
    pair is configured every attempt fails with ``InvalidCredentialsError``.
    """

    def __init__(
        self,
        email: Optional[str],
        password: Optional[str],
        jwt_service: JWTService,
        event_repository: Optional[SecurityEventRepository] = None,
    ):
        self._email = (email or "").strip().lower()
        self._password = password or ""
        self._jwt_service = jwt_service
        self._event_repo = event_repository

    @property
    def enabled(self) -> bool:
        return bool(self._email and self._password)

    async def login(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
    ) -> LoginResult:
        if not self.enabled:
            logger.info("Super admin login attempted but none is configured")
            raise InvalidCredentialsError

        # Evaluate both comparisons so timing does not reveal which one failed
        email_ok = hmac.compare_digest(
            email.strip().lower().encode("utf-8"),
            self._email.encode("utf-8"),
        )
        password_ok = hmac.compare_digest(
            password.encode("utf-8"),
            self._password.encode("utf-8"),
        )
        if not (email_ok and password_ok):
            logger.warning("Failed super admin login attempt")
            raise InvalidCredentialsError

        ttl = self._jwt_service.ttl_for(remember_me)
        token = self._jwt_service.issue_super_admin(self._email, ttl=ttl)
        if self._event_repo is not None:
            await self._event_repo.record(
                SecurityEvent(event_type=SecurityEventType.SUPER_ADMIN_LOGIN),
            )

        logger.info("Super admin logged in")
        return LoginResult(
            account=None,
            access_token=token,
            claims=self._jwt_service.verify(token),
            expires_in=int(ttl.total_seconds()),
        )

