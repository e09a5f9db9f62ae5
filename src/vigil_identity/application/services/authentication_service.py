"""Authentication service: registration, login and the password lifecycle."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from vigil_auth import (
    AccountLockedError,
    AccountNotActiveError,
    InvalidCredentialsError,
    JWTService,
    LockoutGuard,
    PasswordHashingService,
    PasswordPolicy,
    PasswordReusedError,
    TokenClaims,
    TokenInvalidError,
    TokenPurpose,
)
from vigil_identity.application.dtos import (
    EmailVerificationResult,
    LoginResult,
    RegistrationResult,
)
from vigil_identity.domain.account import (
    DEFAULT_ROLE,
    Account,
    Email,
    EmailAlreadyRegisteredError,
    ExternalIdentity,
    InvalidEmailError,
    RoleResolver,
    SecurityEvent,
    SecurityEventType,
)
from vigil_identity.domain.shared.time import ensure_tz_aware, utc_now

if TYPE_CHECKING:
    from vigil_auth import ActionTokenPayload
    from vigil_identity.application.ports import AccountNotifier
    from vigil_identity.domain.account import (
        AccountRepository,
        RoleRepository,
        SecurityEventRepository,
    )

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates the vigil_auth building blocks (hashing, password policy,
    lockout guard, JWT) with the Account aggregate to provide:
    - Registration with email verification
    - Login with lockout protection
    - Password change and token-based password reset
    - Login through an external identity provider
    - Stateless authorization of access tokens

    Methods that change an account load it with a row lock, so the caller
    must run them inside one transaction and commit afterwards. Failed
    logins persist their counter before raising; the caller commits in that
    case too.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        role_repository: RoleRepository,
        event_repository: SecurityEventRepository,
        password_service: PasswordHashingService,
        password_policy: PasswordPolicy,
        lockout_guard: LockoutGuard,
        jwt_service: JWTService,
        role_resolver: Optional[RoleResolver] = None,
        notifier: Optional[AccountNotifier] = None,
        frontend_base_url: str = "http://localhost:5173",
    ):
        self._account_repo = account_repository
        self._role_repo = role_repository
        self._event_repo = event_repository
        self._password_service = password_service
        self._password_policy = password_policy
        self._lockout_guard = lockout_guard
        self._jwt_service = jwt_service
        self._role_resolver = role_resolver or RoleResolver(role_repository)
        self._notifier = notifier
        self._frontend_base_url = frontend_base_url.rstrip("/")

    async def register(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> RegistrationResult:
        email_obj = Email(email)
        if await self._account_repo.exists_by_email(email_obj):
            raise EmailAlreadyRegisteredError(email_obj.value)

        self._password_policy.validate_strength(password)

        default_role = await self._role_repo.get_by_name(DEFAULT_ROLE)
        account = Account.create(
            email_obj,
            self._password_service.hash(password),
            first_name=first_name,
            last_name=last_name,
            roles=[default_role],
        )
        await self._account_repo.save(account)

        verification_token = self._jwt_service.issue_action_token(
            subject=str(account.id),
            email=account.email,
            purpose=TokenPurpose.VERIFY_EMAIL,
        )
        await self._send_verification_email(account, verification_token)
        await self._record(SecurityEventType.REGISTERED, account.id)

        logger.info("Account registered: %s", account.email)
        return RegistrationResult(
            account=account,
            verification_token=verification_token,
        )

    async def login(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
    ) -> LoginResult:
        try:
            email_obj = Email(email)
        except InvalidEmailError as e:
            raise InvalidCredentialsError from e

        account = await self._account_repo.find_by_email(email_obj, for_update=True)
        if account is None:
            self._password_service.verify_dummy(password)
            await self._record(
                SecurityEventType.LOGIN_FAILED,
                details={"email": email_obj.value, "reason": "unknown_email"},
            )
            logger.info("Login failed for unknown email: %s", email_obj.value)
            raise InvalidCredentialsError

        await self._check_lockout(account)

        if not self._password_service.verify(password, account.password_hash):
            await self._handle_failed_login(account)

        if not account.is_active:
            await self._account_repo.save(account)
            await self._record(
                SecurityEventType.LOGIN_REJECTED,
                account.id,
                reason=account.status.value,
            )
            logger.info(
                "Login rejected for %s account: %s",
                account.status.value,
                account.email,
            )
            raise AccountNotActiveError

        account.apply_lockout_state(
            self._lockout_guard.record_success(account.lockout_state),
        )
        account.record_login()
        await self._account_repo.save(account)
        await self._record(SecurityEventType.LOGIN_SUCCEEDED, account.id)

        logger.info("Account logged in: %s", account.email)
        return self._issue_login(account, remember_me)

    async def _check_lockout(self, account: Account) -> None:
        try:
            state = self._lockout_guard.check_access(
                account.lockout_state,
                utc_now(),
            )
        except AccountLockedError:
            await self._record(
                SecurityEventType.LOGIN_REJECTED,
                account.id,
                reason="locked",
            )
            logger.info("Login rejected for locked account: %s", account.email)
            raise
        account.apply_lockout_state(state)

    async def _handle_failed_login(self, account: Account) -> None:
        now = utc_now()
        state = self._lockout_guard.record_failure(account.lockout_state, now)
        account.apply_lockout_state(state)
        await self._account_repo.save(account)

        attempts_left = self._lockout_guard.attempts_left(state)
        await self._record(
            SecurityEventType.LOGIN_FAILED,
            account.id,
            attempts_left=attempts_left,
        )
        if state.is_locked(now):
            await self._record(
                SecurityEventType.ACCOUNT_LOCKED,
                account.id,
                locked_until=state.locked_until.isoformat(),
            )
            logger.warning(
                "Account locked after %d failed attempts: %s",
                state.failed_login_count,
                account.email,
            )
        else:
            logger.info(
                "Login failed for %s (%d attempts left)",
                account.email,
                attempts_left,
            )
        raise InvalidCredentialsError(attempts_left=attempts_left)

    async def login_with_external_identity(  # noqa: PLR0913
        self,
        provider: str,
        subject: str,
        email: str,
        first_name: str = "",
        last_name: str = "",
        remember_me: bool = False,
    ) -> LoginResult:
        """Sign in with an identity asserted by an external provider.

        The provider has already authenticated the person and vouched for
        the email address. A locked account is still refused, before any
        identity is linked. An account registered locally under the same
        email gets the identity linked.
        """
        identity = ExternalIdentity(provider=provider, subject=subject)
        account = await self._account_repo.find_by_external_identity(
            identity.provider,
            identity.subject,
        )
        created = False
        if account is None:
            email_obj = Email(email)
            account = await self._account_repo.find_by_email(
                email_obj,
                for_update=True,
            )
            if account is None:
                default_role = await self._role_repo.get_by_name(DEFAULT_ROLE)
                account = Account.create_external(
                    email_obj,
                    identity,
                    first_name=first_name,
                    last_name=last_name,
                    roles=[default_role],
                )
                created = True

        if not created:
            await self._check_lockout(account)
            if account.external_identity != identity:
                account.link_external_identity(identity)
                account.mark_email_verified()

        if not account.is_active:
            await self._account_repo.save(account)
            raise AccountNotActiveError

        account.record_login()
        await self._account_repo.save(account)
        await self._record(
            SecurityEventType.EXTERNAL_LOGIN,
            account.id,
            provider=identity.provider,
            created=created,
        )

        logger.info(
            "Account logged in via %s: %s",
            identity.provider,
            account.email,
        )
        return self._issue_login(account, remember_me)

    async def change_password(
        self,
        account_id: UUID,
        current_password: str,
        new_password: str,
    ) -> None:
        account = await self._account_repo.get(account_id, for_update=True)
        if not self._password_service.verify(
            current_password,
            account.password_hash,
        ):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)

        self._apply_new_password(account, new_password)
        await self._account_repo.save(account)
        await self._record(SecurityEventType.PASSWORD_CHANGED, account.id)

        logger.info("Password changed for account: %s", account.email)

    async def request_password_reset(self, email: str) -> None:
        """Send a reset link if an active account uses ``email``.

        Returns None whether or not the address is registered so callers
        cannot discover which accounts exist.
        """
        try:
            email_obj = Email(email)
        except InvalidEmailError:
            logger.debug("Password reset requested for malformed email")
            return

        account = await self._account_repo.find_by_email(email_obj)
        if account is None or not account.is_active:
            logger.debug("Password reset requested for unknown or inactive email")
            return

        token = self._jwt_service.issue_action_token(
            subject=str(account.id),
            email=account.email,
            purpose=TokenPurpose.PASSWORD_RESET,
            binding=self._reset_binding(account),
        )
        link = f"{self._frontend_base_url}/reset-password?token={token}"
        if self._notifier is not None:
            try:
                await self._notifier.send_password_reset_email(
                    to_email=account.email,
                    reset_link=link,
                )
            except Exception as e:
                logger.error("Failed to send password reset email: %s", e)
        await self._record(SecurityEventType.PASSWORD_RESET_REQUESTED, account.id)

        logger.info("Password reset requested for: %s", account.email)

    async def reset_password(self, token: str, new_password: str) -> None:
        payload = self._jwt_service.verify_action_token(
            token,
            TokenPurpose.PASSWORD_RESET,
        )
        account = await self._load_token_account(payload, for_update=True)
        if payload.binding != self._reset_binding(account):
            msg = "Password reset link has already been used"
            raise TokenInvalidError(msg)

        self._apply_new_password(account, new_password)
        await self._account_repo.save(account)
        await self._record(SecurityEventType.PASSWORD_RESET, account.id)

        logger.info("Password reset completed for: %s", account.email)

    async def verify_email(self, token: str) -> EmailVerificationResult:
        payload = self._jwt_service.verify_action_token(
            token,
            TokenPurpose.VERIFY_EMAIL,
        )
        account = await self._load_token_account(payload, for_update=True)
        if not account.mark_email_verified():
            return EmailVerificationResult.ALREADY_VERIFIED

        await self._account_repo.save(account)
        await self._record(SecurityEventType.EMAIL_VERIFIED, account.id)

        logger.info("Email verified: %s", account.email)
        return EmailVerificationResult.VERIFIED

    def authorize(self, token: str) -> TokenClaims:
        return self._jwt_service.verify(token)

    def _apply_new_password(self, account: Account, new_password: str) -> None:
        self._password_policy.validate_strength(new_password)
        if self._password_policy.is_reused(
            new_password,
            account.reuse_candidates(),
            self._password_service.verify,
        ):
            raise PasswordReusedError
        account.set_password(
            self._password_service.hash(new_password),
            history_size=self._password_policy.history_size,
        )

    async def _load_token_account(
        self,
        payload: ActionTokenPayload,
        for_update: bool = False,
    ) -> Account:
        try:
            account_id = UUID(payload.subject)
        except ValueError as e:
            raise TokenInvalidError from e
        account = await self._account_repo.find_by_id(
            account_id,
            for_update=for_update,
        )
        # Email is immutable, so a mismatch means a forged or stale subject
        if account is None or account.email != payload.email:
            raise TokenInvalidError
        return account

    def _issue_login(self, account: Account, remember_me: bool) -> LoginResult:
        claims = self._role_resolver.claims_for(account)
        ttl = self._jwt_service.ttl_for(remember_me)
        return LoginResult(
            account=account,
            access_token=self._jwt_service.issue(claims, ttl=ttl),
            claims=claims,
            expires_in=int(ttl.total_seconds()),
        )

    async def _send_verification_email(self, account: Account, token: str) -> None:
        if self._notifier is None:
            return
        link = f"{self._frontend_base_url}/verify-email?token={token}"
        try:
            await self._notifier.send_verification_email(
                to_email=account.email,
                verification_link=link,
            )
        except Exception as e:
            logger.error("Failed to send verification email: %s", e)

    async def _record(
        self,
        event_type: SecurityEventType,
        account_id: UUID | None = None,
        details: dict | None = None,
        **extra: object,
    ) -> None:
        await self._event_repo.record(
            SecurityEvent(
                event_type=event_type,
                account_id=account_id,
                details={**(details or {}), **extra},
            ),
        )

    @staticmethod
    def _reset_binding(account: Account) -> str:
        # Microseconds since the epoch survive SQLite and PostgreSQL round trips
        changed_at = account.password_changed_at
        if changed_at is None:
            return "never"
        delta = ensure_tz_aware(changed_at) - _EPOCH
        return str(delta // timedelta(microseconds=1))
