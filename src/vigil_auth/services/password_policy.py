"""Password strength and reuse rules.

Pure functions over a candidate password and the account's hash history.
No hashing of new passwords and no persistence happen here.
"""

from collections.abc import Callable, Iterable

from vigil_auth.exceptions import WeakPasswordError
from vigil_auth.services.password_service import BCRYPT_MAX_BYTES

REASON_LENGTH = "length"
REASON_MAX_LENGTH = "max_length"
REASON_UPPERCASE = "uppercase"
REASON_LOWERCASE = "lowercase"
REASON_DIGIT = "digit"
REASON_SPECIAL = "special"

PasswordVerifier = Callable[[str, str], bool]


class PasswordPolicy:
    """Strength validation and reuse prevention.

    Examples
    --------
    >>> policy = PasswordPolicy()
    >>> policy.violations("Weak1!")
    ['length']
    >>> policy.violations("Str0ng!Passw0rd")
    []
    """

    MIN_LENGTH = 12
    MAX_BYTES = BCRYPT_MAX_BYTES
    HISTORY_SIZE = 5

    def __init__(
        self,
        min_length: int = MIN_LENGTH,
        max_bytes: int = MAX_BYTES,
        history_size: int = HISTORY_SIZE,
    ):
        if max_bytes > BCRYPT_MAX_BYTES:
            msg = f"max_bytes cannot exceed bcrypt's {BCRYPT_MAX_BYTES}-byte input"
            raise ValueError(msg)
        if min_length > max_bytes:
            msg = "min_length cannot exceed max_bytes"
            raise ValueError(msg)
        self.min_length = min_length
        self.max_bytes = max_bytes
        self.history_size = history_size

    def violations(self, candidate: str) -> list[str]:
        """Return every rule the candidate breaks, in a stable order.

        All checks run; nothing short-circuits. Length is counted in
        characters, the upper bound in UTF-8 bytes.
        """
        candidate = candidate or ""
        reasons: list[str] = []

        if len(candidate) < self.min_length:
            reasons.append(REASON_LENGTH)
        if len(candidate.encode("utf-8")) > self.max_bytes:
            reasons.append(REASON_MAX_LENGTH)
        if not any(c.isupper() for c in candidate):
            reasons.append(REASON_UPPERCASE)
        if not any(c.islower() for c in candidate):
            reasons.append(REASON_LOWERCASE)
        if not any(c.isdigit() for c in candidate):
            reasons.append(REASON_DIGIT)
        if not any(_is_special(c) for c in candidate):
            reasons.append(REASON_SPECIAL)

        return reasons

    def validate_strength(self, candidate: str) -> None:
        """Validate that a password meets strength requirements.

        Parameters
        ----------
        candidate
            The plaintext password to validate

        Raises
        ------
        WeakPasswordError
            Listing every violated rule
        """
        reasons = self.violations(candidate)
        if reasons:
            raise WeakPasswordError(reasons)

    def is_reused(
        self,
        candidate: str,
        history: Iterable[str],
        verify: PasswordVerifier,
    ) -> bool:
        """Check the candidate against every stored hash.

        Parameters
        ----------
        candidate
            The plaintext password about to be set
        history
            Recent password hashes, oldest first
        verify
            Constant-time ``(plaintext, hash) -> bool`` check, normally
            ``PasswordHashingService.verify``

        Returns
        -------
        True on the first matching hash
        """
        return any(verify(candidate, stored) for stored in history if stored)


def _is_special(char: str) -> bool:
    return not char.isalnum() and not char.isspace()
