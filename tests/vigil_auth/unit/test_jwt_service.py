"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from vigil_auth import (
    InvalidTokenError,
    TokenClaims,
    TokenExpiredError,
    TokenInvalidError,
    TokenPurpose,
)
from vigil_auth.services import SUPER_ADMIN_SUBJECT, JWTService

SECRET = "test-secret-key-12345"


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_empty_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")

    def test_ttl_for_login_options(self):
        service = JWTService(
            secret_key=SECRET,
            access_token_expire_hours=2,
            remember_me_expire_days=3,
        )

        assert service.ttl_for(remember_me=False) == timedelta(hours=2)
        assert service.ttl_for(remember_me=True) == timedelta(days=3)


class TestAccessTokens:
    """Tests for access token issue and verification."""

    def setup_method(self):
        self.service = JWTService(secret_key=SECRET)
        self.claims = TokenClaims(
            subject="5f3c9a5e-1d44-4a8e-9a57-0c1f1b3e2d10",
            email="alice@example.com",
            roles=("admin", "user"),
            is_admin=True,
            is_super_admin=False,
        )

    def test_verify_returns_issued_claims(self):
        token = self.service.issue(self.claims)

        assert self.service.verify(token) == self.claims

    def test_verify_returns_claims_without_roles(self):
        claims = TokenClaims(subject="42", email="bob@example.com")

        token = self.service.issue(claims)

        assert self.service.verify(token) == claims

    def test_expired_token_raises_token_expired(self):
        token = self.service.issue(self.claims, ttl=timedelta(seconds=-1))

        with pytest.raises(TokenExpiredError):
            self.service.verify(token)

    def test_expired_is_still_an_invalid_token_error(self):
        """Callers catching the base class keep working."""
        token = self.service.issue(self.claims, ttl=timedelta(seconds=-1))

        with pytest.raises(InvalidTokenError):
            self.service.verify(token)

    def test_wrong_secret_raises_token_invalid(self):
        other = JWTService(secret_key="another-secret")
        token = other.issue(self.claims)

        with pytest.raises(TokenInvalidError):
            self.service.verify(token)

    def test_tampered_token_raises_token_invalid(self):
        token = self.service.issue(self.claims)
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[:-4]}AAAA"

        with pytest.raises(TokenInvalidError):
            self.service.verify(tampered)

    def test_garbage_raises_token_invalid(self):
        with pytest.raises(TokenInvalidError):
            self.service.verify("not-a-jwt")

    def test_token_without_purpose_is_rejected(self):
        now = datetime.now(tz=timezone.utc)
        token = jwt.encode(
            {"sub": "42", "email": "a@b.io", "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError):
            self.service.verify(token)

    def test_token_without_email_is_malformed(self):
        now = datetime.now(tz=timezone.utc)
        token = jwt.encode(
            {"sub": "42", "purpose": "access", "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalidError, match="Malformed"):
            self.service.verify(token)

    def test_custom_ttl_is_applied(self):
        token = self.service.issue(self.claims, ttl=timedelta(days=7))
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


class TestActionTokens:
    """Tests for purpose-bound action tokens."""

    def setup_method(self):
        self.service = JWTService(secret_key=SECRET)

    def test_round_trip_with_binding(self):
        token = self.service.issue_action_token(
            subject="42",
            email="alice@example.com",
            purpose=TokenPurpose.PASSWORD_RESET,
            binding="1700000000000000",
        )

        payload = self.service.verify_action_token(token, TokenPurpose.PASSWORD_RESET)

        assert payload.subject == "42"
        assert payload.email == "alice@example.com"
        assert payload.purpose is TokenPurpose.PASSWORD_RESET
        assert payload.binding == "1700000000000000"
        assert payload.expires_at > datetime.now(tz=timezone.utc)

    def test_default_lifetime_is_one_hour(self):
        token = self.service.issue_action_token(
            subject="42",
            email="alice@example.com",
            purpose=TokenPurpose.VERIFY_EMAIL,
        )
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["exp"] - payload["iat"] == 3600

    def test_verification_token_cannot_reset_password(self):
        token = self.service.issue_action_token(
            subject="42",
            email="alice@example.com",
            purpose=TokenPurpose.VERIFY_EMAIL,
        )

        with pytest.raises(TokenInvalidError, match="password_reset"):
            self.service.verify_action_token(token, TokenPurpose.PASSWORD_RESET)

    def test_action_token_is_not_an_access_token(self):
        token = self.service.issue_action_token(
            subject="42",
            email="alice@example.com",
            purpose=TokenPurpose.PASSWORD_RESET,
        )

        with pytest.raises(TokenInvalidError):
            self.service.verify(token)

    def test_access_token_is_not_an_action_token(self):
        token = self.service.issue(TokenClaims(subject="42", email="a@b.io"))

        with pytest.raises(TokenInvalidError):
            self.service.verify_action_token(token, TokenPurpose.VERIFY_EMAIL)

    def test_access_purpose_is_refused(self):
        with pytest.raises(ValueError, match="access purpose"):
            self.service.issue_action_token(
                subject="42",
                email="a@b.io",
                purpose=TokenPurpose.ACCESS,
            )

    def test_expired_link_raises_token_expired(self):
        token = self.service.issue_action_token(
            subject="42",
            email="a@b.io",
            purpose=TokenPurpose.VERIFY_EMAIL,
            ttl=timedelta(seconds=-1),
        )

        with pytest.raises(TokenExpiredError):
            self.service.verify_action_token(token, TokenPurpose.VERIFY_EMAIL)


class TestSuperAdminToken:
    def test_fixed_claims(self):
        service = JWTService(secret_key=SECRET)

        claims = service.verify(service.issue_super_admin("root@vigil.io"))

        assert claims.subject == SUPER_ADMIN_SUBJECT
        assert claims.email == "root@vigil.io"
        assert claims.roles == ("super_admin",)
        assert claims.is_admin is True
        assert claims.is_super_admin is True
