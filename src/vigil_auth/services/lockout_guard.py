"""Account lockout state machine.

Two states over ``(failed_login_count, locked_until)``:

- Unlocked: ``locked_until`` is None or in the past
- Locked: ``locked_until`` is in the future

Every transition is a pure function returning a new ``LockoutState``; the
caller applies it to the account and persists it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from vigil_auth.exceptions import AccountLockedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LockoutState:
    """Failed-attempt counter and lock expiry of one account."""

    failed_login_count: int = 0
    locked_until: datetime | None = None

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now


class LockoutGuard:
    """Tracks failed logins and locks accounts that cross the threshold.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> guard = LockoutGuard(threshold=2)
    >>> now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> state = guard.record_failure(LockoutState(), now)
    >>> state = guard.record_failure(state, now)
    >>> state.is_locked(now)
    True
    """

    DEFAULT_THRESHOLD = 5
    DEFAULT_DURATION_MINUTES = 30

    def __init__(
        self,
        threshold: int = DEFAULT_THRESHOLD,
        lockout_duration: timedelta = timedelta(minutes=DEFAULT_DURATION_MINUTES),
    ):
        if threshold < 1:
            msg = "Lockout threshold must be at least 1"
            raise ValueError(msg)
        self._threshold = threshold
        self._duration = lockout_duration

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def lockout_duration(self) -> timedelta:
        return self._duration

    def check_access(self, state: LockoutState, now: datetime) -> LockoutState:
        """Gate a login attempt before any credential is looked at.

        An elapsed lock is cleared lazily; the failure counter is left as
        is, so only a successful login or an admin unlock resets it.

        Raises
        ------
        AccountLockedError
            While ``locked_until`` is still in the future
        """
        locked_until = state.locked_until
        if locked_until is None:
            return state

        if locked_until > now:
            retry_after = math.ceil((locked_until - now).total_seconds())
            raise AccountLockedError(
                locked_until=locked_until,
                retry_after=retry_after,
            )

        logger.debug("Lock expired at %s, allowing attempt", locked_until)
        return LockoutState(failed_login_count=state.failed_login_count)

    def record_failure(self, state: LockoutState, now: datetime) -> LockoutState:
        """Count a failed attempt and lock once the threshold is reached."""
        if state.is_locked(now):
            return state

        count = state.failed_login_count + 1
        if count >= self._threshold:
            return LockoutState(
                failed_login_count=count,
                locked_until=now + self._duration,
            )
        return LockoutState(failed_login_count=count)

    def record_success(self, state: LockoutState) -> LockoutState:  # noqa: ARG002
        """Reset counter and lock from any state."""
        return LockoutState()

    def force_unlock(self, state: LockoutState) -> LockoutState:  # noqa: ARG002
        """Administrative override, regardless of elapsed time."""
        return LockoutState()

    def attempts_left(self, state: LockoutState) -> int:
        return max(0, self._threshold - state.failed_login_count)
