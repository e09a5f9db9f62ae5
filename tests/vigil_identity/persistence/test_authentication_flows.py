"""End-to-end authentication flows against an in-memory SQLite database.

Each step runs in its own session and transaction, the way the HTTP layer
drives the service: one request, one commit.
"""

from datetime import datetime, timedelta, timezone

import pytest

from tests.shared.fixtures.factories import (
    OTHER_STRONG_PASSWORD,
    STRONG_PASSWORD,
    build_auth_service,
    strong_password,
)
from vigil_auth import (
    AccountLockedError,
    AccountNotActiveError,
    InvalidCredentialsError,
    LockoutGuard,
    LockoutState,
    PasswordReusedError,
    TokenInvalidError,
)
from vigil_identity.application.commands import (
    ChangeAccountStatusCommand,
    ForceUnlockCommand,
)
from vigil_identity.application.dtos import EmailVerificationResult
from vigil_identity.domain.account import EmailAlreadyRegisteredError
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    SecurityEventRepositorySQLAlchemy,
)

EMAIL = "a@b.com"
WRONG_PASSWORD = "Wrong-Horse-42"


async def _register(session_maker, email=EMAIL, password=STRONG_PASSWORD):
    async with session_maker() as session:
        result = await build_auth_service(session).register(email, password)
        await session.commit()
    return result


async def _login(session_maker, email=EMAIL, password=STRONG_PASSWORD):
    """One login request; the outcome is committed whether it succeeds or not."""
    async with session_maker() as session:
        try:
            return await build_auth_service(session).login(email, password)
        finally:
            await session.commit()


async def _load(session_maker, email=EMAIL):
    async with session_maker() as session:
        return await AccountRepositorySQLAlchemy(session).find_by_email(email)


async def _expire_lock(session_maker, email=EMAIL):
    """Move the lock expiry into the past, as if the lock window elapsed."""
    async with session_maker() as session:
        repo = AccountRepositorySQLAlchemy(session)
        account = await repo.find_by_email(email, for_update=True)
        account.apply_lockout_state(
            LockoutState(
                failed_login_count=account.failed_login_count,
                locked_until=datetime.now(tz=timezone.utc) - timedelta(seconds=1),
            ),
        )
        await repo.save(account)
        await session.commit()


async def _set_password(session_maker, account_id, current, new):
    async with session_maker() as session:
        await build_auth_service(session).change_password(account_id, current, new)
        await session.commit()


class TestRegistrationAndLogin:
    @pytest.mark.asyncio
    async def test_register_then_login_grants_user_role(self, sqlite_session_maker):
        # Arrange
        await _register(sqlite_session_maker)

        # Act
        result = await _login(sqlite_session_maker)

        # Assert
        assert result.claims.roles == ("user",)
        assert result.claims.is_admin is False
        assert result.claims.is_super_admin is False
        assert result.claims.email == EMAIL

    @pytest.mark.asyncio
    async def test_register_persists_unverified_account(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker)

        account = await _load(sqlite_session_maker)

        assert account.id == registered.account.id
        assert account.email_verified is False
        assert account.is_active
        assert account.failed_login_count == 0
        assert len(account.password_history) == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, sqlite_session_maker):
        await _register(sqlite_session_maker)

        with pytest.raises(EmailAlreadyRegisteredError):
            await _register(sqlite_session_maker, email="A@B.com")

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, sqlite_session_maker):
        await _register(sqlite_session_maker)

        result = await _login(sqlite_session_maker, email="A@B.COM")

        assert result.claims.email == EMAIL


class TestLockout:
    @pytest.mark.asyncio
    async def test_five_failures_then_locked_even_with_correct_password(
        self,
        sqlite_session_maker,
    ):
        # Arrange
        await _register(sqlite_session_maker)

        # Act
        attempts_left = []
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError) as exc_info:
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)
            attempts_left.append(exc_info.value.attempts_left)

        # Assert
        assert attempts_left == [4, 3, 2, 1, 0]
        with pytest.raises(AccountLockedError) as exc_info:
            await _login(sqlite_session_maker)
        assert 0 < exc_info.value.retry_after <= 30 * 60

        account = await _load(sqlite_session_maker)
        assert account.failed_login_count == 5
        assert account.locked_until > datetime.now(tz=timezone.utc)

    @pytest.mark.asyncio
    async def test_login_succeeds_after_lock_elapses(self, sqlite_session_maker):
        await _register(sqlite_session_maker)
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)

        await _expire_lock(sqlite_session_maker)
        result = await _login(sqlite_session_maker)

        assert result.access_token
        account = await _load(sqlite_session_maker)
        assert account.failed_login_count == 0
        assert account.locked_until is None

    @pytest.mark.asyncio
    async def test_success_resets_partial_failures(self, sqlite_session_maker):
        await _register(sqlite_session_maker)
        for _ in range(3):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)

        await _login(sqlite_session_maker)

        # The counter starts over: four more failures do not lock
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)
        account = await _load(sqlite_session_maker)
        assert account.failed_login_count == 4
        assert account.locked_until is None

    @pytest.mark.asyncio
    async def test_admin_unlock_before_expiry(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker)
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)

        async with sqlite_session_maker() as session:
            await ForceUnlockCommand(
                account_repository=AccountRepositorySQLAlchemy(session),
                event_repository=SecurityEventRepositorySQLAlchemy(session),
                lockout_guard=LockoutGuard(),
            ).execute(registered.account.id, performed_by="ops@vigil.io")
            await session.commit()

        result = await _login(sqlite_session_maker)
        assert result.access_token

    @pytest.mark.asyncio
    async def test_failures_and_lock_are_audited(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker)
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)
        with pytest.raises(AccountLockedError):
            await _login(sqlite_session_maker)

        async with sqlite_session_maker() as session:
            events = await SecurityEventRepositorySQLAlchemy(
                session,
            ).list_for_account(registered.account.id)

        counts: dict[str, int] = {}
        for event in events:
            counts[event.event_type.value] = counts.get(event.event_type.value, 0) + 1
        assert counts == {
            "registered": 1,
            "login_failed": 5,
            "account_locked": 1,
            "login_rejected": 1,
        }

    @pytest.mark.asyncio
    async def test_suspended_account_cannot_log_in(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker)
        async with sqlite_session_maker() as session:
            await ChangeAccountStatusCommand(
                AccountRepositorySQLAlchemy(session),
                SecurityEventRepositorySQLAlchemy(session),
            ).execute(registered.account.id, "suspended")
            await session.commit()

        with pytest.raises(AccountNotActiveError):
            await _login(sqlite_session_maker)

    @pytest.mark.asyncio
    async def test_locked_account_cannot_sign_in_through_provider(
        self,
        sqlite_session_maker,
    ):
        await _register(sqlite_session_maker)
        for _ in range(5):
            with pytest.raises(InvalidCredentialsError):
                await _login(sqlite_session_maker, password=WRONG_PASSWORD)

        async with sqlite_session_maker() as session:
            with pytest.raises(AccountLockedError):
                await build_auth_service(session).login_with_external_identity(
                    "google",
                    "g-1",
                    EMAIL,
                )
            await session.commit()

        account = await _load(sqlite_session_maker)
        assert account.external_identity is None
        assert account.last_login_at is None


class TestPasswordLifecycle:
    @pytest.mark.asyncio
    async def test_third_of_last_five_passwords_is_rejected(
        self,
        sqlite_session_maker,
    ):
        # Arrange: P1 at registration, then P2..P5
        registered = await _register(sqlite_session_maker, password=strong_password(1))
        account_id = registered.account.id
        for n in range(2, 6):
            await _set_password(
                sqlite_session_maker,
                account_id,
                strong_password(n - 1),
                strong_password(n),
            )

        # Act & Assert
        with pytest.raises(PasswordReusedError):
            await _set_password(
                sqlite_session_maker,
                account_id,
                strong_password(5),
                strong_password(3),
            )

        account = await _load(sqlite_session_maker)
        assert len(account.password_history) == 5

    @pytest.mark.asyncio
    async def test_evicted_password_can_be_reused(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker, password=strong_password(1))
        account_id = registered.account.id
        for n in range(2, 7):
            await _set_password(
                sqlite_session_maker,
                account_id,
                strong_password(n - 1),
                strong_password(n),
            )

        # P1 fell out of the five-entry history when P6 was set
        await _set_password(
            sqlite_session_maker,
            account_id,
            strong_password(6),
            strong_password(1),
        )

        result = await _login(sqlite_session_maker, password=strong_password(1))
        assert result.access_token

    @pytest.mark.asyncio
    async def test_verify_email_is_idempotent(self, sqlite_session_maker):
        registered = await _register(sqlite_session_maker)
        token = registered.verification_token

        outcomes = []
        for _ in range(2):
            async with sqlite_session_maker() as session:
                outcomes.append(await build_auth_service(session).verify_email(token))
                await session.commit()

        assert outcomes == [
            EmailVerificationResult.VERIFIED,
            EmailVerificationResult.ALREADY_VERIFIED,
        ]
        account = await _load(sqlite_session_maker)
        assert account.email_verified is True

    @pytest.mark.asyncio
    async def test_reset_token_works_once(self, sqlite_session_maker):
        # Arrange
        await _register(sqlite_session_maker)
        links = []

        class _CapturingNotifier:
            async def send_password_reset_email(self, to_email, reset_link):
                links.append(reset_link)

        async with sqlite_session_maker() as session:
            service = build_auth_service(session, notifier=_CapturingNotifier())
            await service.request_password_reset(EMAIL)
            await session.commit()
        token = links[0].split("token=", 1)[1]

        # Act
        async with sqlite_session_maker() as session:
            await build_auth_service(session).reset_password(
                token,
                OTHER_STRONG_PASSWORD,
            )
            await session.commit()

        # Assert
        with pytest.raises(TokenInvalidError):
            async with sqlite_session_maker() as session:
                await build_auth_service(session).reset_password(
                    token,
                    "Yet-Another-Pass-1!",
                )

        result = await _login(sqlite_session_maker, password=OTHER_STRONG_PASSWORD)
        assert result.access_token
        with pytest.raises(InvalidCredentialsError):
            await _login(sqlite_session_maker)
