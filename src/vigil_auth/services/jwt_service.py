"""JWT token service.

Provides signed, time-limited bearer tokens carrying identity and role
claims, plus short-lived purpose-tagged action tokens for email
verification and password reset links.
"""

from datetime import datetime, timedelta, timezone

import jwt

from vigil_auth.exceptions import TokenExpiredError, TokenInvalidError
from vigil_auth.schemas import ActionTokenPayload, TokenClaims, TokenPurpose

SUPER_ADMIN_SUBJECT = "super_admin"
SUPER_ADMIN_ROLE = "super_admin"


class JWTService:
    """Service for JWT token creation and verification.

    Verification distinguishes an expired token (signature valid, window
    elapsed) from an invalid one (bad signature, malformed payload, or a
    token presented for the wrong purpose).

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> claims = TokenClaims(subject="42", email="a@b.com", roles=("user",))
    >>> token = service.issue(claims)
    >>> service.verify(token) == claims
    True
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    DEFAULT_REMEMBER_ME_EXPIRE_DAYS = 7
    DEFAULT_ACTION_EXPIRE_HOURS = 1
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
        remember_me_expire_days: int = DEFAULT_REMEMBER_ME_EXPIRE_DAYS,
        action_token_expire_hours: int = DEFAULT_ACTION_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until a regular access token expires (default 24)
        remember_me_expire_days
            Days until a "remember me" access token expires (default 7)
        action_token_expire_hours
            Hours until verification/reset tokens expire (default 1)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)
        self._remember_me_expire = timedelta(days=remember_me_expire_days)
        self._action_expire = timedelta(hours=action_token_expire_hours)

    def ttl_for(self, remember_me: bool = False) -> timedelta:
        """Lifetime of an access token for the given login option."""
        return self._remember_me_expire if remember_me else self._access_expire

    def issue(self, claims: TokenClaims, ttl: timedelta | None = None) -> str:
        """Create a signed access token.

        Parameters
        ----------
        claims
            Identity and role claims to embed
        ttl
            Custom lifetime (defaults to the access token lifetime)

        Returns
        -------
        The encoded JWT token string
        """
        payload = {
            "sub": claims.subject,
            "email": claims.email,
            "roles": list(claims.roles),
            "is_admin": claims.is_admin,
            "is_super_admin": claims.is_super_admin,
        }
        return self._encode(payload, TokenPurpose.ACCESS, ttl or self._access_expire)

    def verify(self, token: str) -> TokenClaims:
        """Verify and decode an access token.

        Raises
        ------
        TokenExpiredError
            If the signature is valid but the token has expired
        TokenInvalidError
            If the token is malformed, forged, or not an access token
        """
        payload = self._decode(token, TokenPurpose.ACCESS)
        try:
            return TokenClaims(
                subject=str(payload["sub"]),
                email=payload["email"],
                roles=tuple(payload.get("roles", [])),
                is_admin=bool(payload.get("is_admin", False)),
                is_super_admin=bool(payload.get("is_super_admin", False)),
            )
        except (KeyError, TypeError) as e:
            msg = f"Malformed token payload: {e}"
            raise TokenInvalidError(msg) from e

    def issue_action_token(
        self,
        subject: str,
        email: str,
        purpose: TokenPurpose,
        binding: str | None = None,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a short-lived token for an emailed link.

        Parameters
        ----------
        subject
            Account identifier the action applies to
        email
            Email address the link is sent to
        purpose
            What the token may be redeemed for (never ``ACCESS``)
        binding
            Optional account state the token is pinned to
        ttl
            Custom lifetime (defaults to the action token lifetime)
        """
        if purpose is TokenPurpose.ACCESS:
            msg = "Action tokens cannot carry the access purpose"
            raise ValueError(msg)

        payload: dict[str, object] = {"sub": subject, "email": email}
        if binding is not None:
            payload["bnd"] = binding
        return self._encode(payload, purpose, ttl or self._action_expire)

    def verify_action_token(
        self,
        token: str,
        purpose: TokenPurpose,
    ) -> ActionTokenPayload:
        """Verify an action token issued for ``purpose``.

        Raises
        ------
        TokenExpiredError
            If the link has expired
        TokenInvalidError
            If the token is malformed, forged, or issued for another purpose
        """
        payload = self._decode(token, purpose)
        try:
            return ActionTokenPayload(
                subject=str(payload["sub"]),
                email=payload["email"],
                purpose=purpose,
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                binding=payload.get("bnd"),
            )
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed token payload: {e}"
            raise TokenInvalidError(msg) from e

    def issue_super_admin(self, email: str, ttl: timedelta | None = None) -> str:
        """Fixed-claim token for the configured bootstrap super administrator.

        Never derived from stored roles.
        """
        claims = TokenClaims(
            subject=SUPER_ADMIN_SUBJECT,
            email=email,
            roles=(SUPER_ADMIN_ROLE,),
            is_admin=True,
            is_super_admin=True,
        )
        return self.issue(claims, ttl)

    def _encode(
        self,
        payload: dict[str, object],
        purpose: TokenPurpose,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            **payload,
            "purpose": purpose.value,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def _decode(self, token: str, purpose: TokenPurpose) -> dict:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "sub", "purpose"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            msg = f"Invalid token: {e}"
            raise TokenInvalidError(msg) from e

        if payload.get("purpose") != purpose.value:
            msg = f"Token is not valid for {purpose.value}"
            raise TokenInvalidError(msg)
        return payload
