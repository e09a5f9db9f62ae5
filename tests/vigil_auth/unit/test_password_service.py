"""Unit tests for PasswordHashingService."""

from unittest.mock import patch

import pytest

from vigil_auth.services import PasswordHashingService


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_hash_returns_bcrypt_format(self):
        hashed = self.service.hash("Correct-Horse-42")

        # bcrypt hashes start with $2b$ or $2a$
        assert hashed.startswith("$2")
        assert len(hashed) >= 50

    def test_verify_correct_password(self):
        hashed = self.service.hash("Correct-Horse-42")

        assert self.service.verify("Correct-Horse-42", hashed) is True

    def test_verify_incorrect_password(self):
        hashed = self.service.hash("Correct-Horse-42")

        assert self.service.verify("Correct-Horse-43", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_verify_missing_hash_returns_false(self):
        """Accounts without a local password never match."""
        assert self.service.verify("password", None) is False

    def test_hash_is_salted(self):
        first = self.service.hash("same_password")
        second = self.service.hash("same_password")

        assert first != second
        assert self.service.verify("same_password", first)
        assert self.service.verify("same_password", second)

    def test_72_byte_password_round_trips(self):
        password = "Aa1!" * 18
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed) is True

    def test_longer_guess_with_same_prefix_does_not_match(self):
        """bcrypt ignores bytes past 72, so longer input must never reach it."""
        password = "Aa1!" * 18
        hashed = self.service.hash(password)

        assert self.service.verify(password + "-other-guess-00", hashed) is False

    def test_hash_refuses_input_over_72_bytes(self):
        with pytest.raises(ValueError, match="72 bytes"):
            self.service.hash("Aa1!" * 18 + "x")

    def test_hash_counts_utf8_bytes(self):
        with pytest.raises(ValueError):
            self.service.hash("\u00e4" * 37)


class TestDummyVerification:
    def test_dummy_hash_is_computed_once_per_work_factor(self):
        service = PasswordHashingService(rounds=4)
        service.verify_dummy("anything")

        with patch.object(service, "hash", wraps=service.hash) as hash_spy:
            service.verify_dummy("something else")
            service.verify_dummy("and again")

        hash_spy.assert_not_called()

    def test_dummy_verification_runs_bcrypt(self):
        service = PasswordHashingService(rounds=4)

        with patch.object(service, "verify", wraps=service.verify) as verify_spy:
            service.verify_dummy("guess")

        verify_spy.assert_called_once()
        assert verify_spy.call_args[0][0] == "guess"
