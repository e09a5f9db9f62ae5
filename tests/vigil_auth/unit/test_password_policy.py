"""Unit tests for PasswordPolicy."""

import pytest

from vigil_auth import PasswordHashingService, PasswordPolicy, WeakPasswordError

ALL_CHARACTER_CLASSES = ["uppercase", "lowercase", "digit", "special"]


class TestStrengthRules:
    """Tests for the strength rules and their reasons."""

    def setup_method(self):
        self.policy = PasswordPolicy()

    def test_strong_password_has_no_violations(self):
        assert self.policy.violations("Str0ng!Passw0rd") == []

    def test_short_password_only_fails_length(self):
        assert self.policy.violations("Weak1!") == ["length"]

    def test_every_violation_is_reported(self):
        """All rules run; nothing short-circuits."""
        assert self.policy.violations("") == ["length", *ALL_CHARACTER_CLASSES]

    @pytest.mark.parametrize(
        ("candidate", "reason"),
        [
            ("correct-horse-42", "uppercase"),
            ("CORRECT-HORSE-42", "lowercase"),
            ("Correct-Horse-xx", "digit"),
            ("CorrectHorse4242", "special"),
        ],
    )
    def test_single_missing_character_class(self, candidate, reason):
        assert self.policy.violations(candidate) == [reason]

    def test_exactly_min_length_passes(self):
        candidate = "Abcdefgh1!xy"
        assert len(candidate) == 12

        assert self.policy.violations(candidate) == []

    def test_exactly_max_bytes_passes(self):
        candidate = "Aa1!" + "x" * 68

        assert self.policy.violations(candidate) == []

    def test_over_max_bytes_fails(self):
        candidate = "Aa1!" + "x" * 69

        assert self.policy.violations(candidate) == ["max_length"]

    def test_upper_bound_counts_utf8_bytes(self):
        """40 characters, but the umlauts push it to 76 bytes."""
        candidate = "Aa1!" + "\u00e4" * 36
        assert len(candidate) == 40

        assert self.policy.violations(candidate) == ["max_length"]

    def test_whitespace_is_not_special(self):
        assert "special" in self.policy.violations("Correct Horse 42")

    def test_unicode_letters_count_as_letters(self):
        assert self.policy.violations("Äpfel-und-Öl-42") == []

    def test_custom_min_length(self):
        policy = PasswordPolicy(min_length=20)

        assert policy.violations("Str0ng!Passw0rd") == ["length"]

    def test_min_length_cannot_exceed_max_length(self):
        with pytest.raises(ValueError, match="min_length"):
            PasswordPolicy(min_length=200)

    def test_max_bytes_cannot_exceed_bcrypt_input(self):
        with pytest.raises(ValueError, match="max_bytes"):
            PasswordPolicy(max_bytes=100)


class TestValidateStrength:
    def test_raises_with_all_reasons(self):
        policy = PasswordPolicy()

        with pytest.raises(WeakPasswordError) as exc_info:
            policy.validate_strength("weak")

        assert exc_info.value.reasons == ["length", "uppercase", "digit", "special"]
        assert "length" in exc_info.value.message

    def test_passes_strong_password(self):
        PasswordPolicy().validate_strength("Str0ng!Passw0rd")


class TestReuse:
    """Tests for reuse detection against the hash history."""

    def setup_method(self):
        self.policy = PasswordPolicy()
        self.hasher = PasswordHashingService(rounds=4)
        self.passwords = [f"Rotation-Pass-{n:02d}!" for n in range(1, 6)]
        self.history = [self.hasher.hash(p) for p in self.passwords]

    def test_every_recent_password_is_reused(self):
        for password in self.passwords:
            assert self.policy.is_reused(password, self.history, self.hasher.verify)

    def test_new_password_is_not_reused(self):
        assert not self.policy.is_reused(
            "Fresh-Password-99",
            self.history,
            self.hasher.verify,
        )

    def test_empty_history_never_matches(self):
        assert not self.policy.is_reused("Anything-1!", [], self.hasher.verify)

    def test_blank_entries_are_skipped(self):
        calls = []

        def verify(candidate, stored):
            calls.append(stored)
            return False

        self.policy.is_reused("Anything-1!", ["", "hash"], verify)

        assert calls == ["hash"]
