"""Password hashing service using bcrypt.

Provides salted password hashing and constant-time verification. Strength
and reuse rules live in ``PasswordPolicy``.
"""

from typing import ClassVar

import bcrypt

# bcrypt only looks at the first 72 bytes of its input; longer passwords are
# refused rather than truncated so two of them can never share a hash
BCRYPT_MAX_BYTES = 72

_DUMMY_PASSWORD = "vigil-timing-equalizer"  # noqa: S105


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("Str0ng!Passw0rd")
    >>> service.verify("Str0ng!Passw0rd", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    _dummy_hashes: ClassVar[dict[int, str]] = {}

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        ValueError
            If the password is longer than 72 UTF-8 bytes
        """
        encoded = self._encode(password)
        if len(encoded) > BCRYPT_MAX_BYTES:
            msg = f"Password exceeds {BCRYPT_MAX_BYTES} bytes"
            raise ValueError(msg)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(encoded, salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verify a password against a hash.

        bcrypt compares digests in constant time.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against; ``None`` never matches, nor
            does a password longer than 72 bytes

        Returns
        -------
        True if password matches, False otherwise
        """
        encoded = self._encode(password)
        if not password_hash or len(encoded) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(
                encoded,
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def verify_dummy(self, password: str) -> None:
        """Spend one verification's worth of work against a throwaway hash.

        Called when no account matches a login email so response time does
        not reveal whether the address is registered.
        """
        dummy_hash = self._dummy_hashes.get(self._rounds)
        if dummy_hash is None:
            dummy_hash = self.hash(_DUMMY_PASSWORD)
            self._dummy_hashes[self._rounds] = dummy_hash
        self.verify(password, dummy_hash)

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")
