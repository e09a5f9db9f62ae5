"""Unit tests for the lockout state machine."""

from datetime import datetime, timedelta, timezone

import pytest

from vigil_auth import AccountLockedError, LockoutGuard, LockoutState

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _fail(guard: LockoutGuard, state: LockoutState, times: int) -> LockoutState:
    for _ in range(times):
        state = guard.record_failure(state, NOW)
    return state


class TestRecordFailure:
    def setup_method(self):
        self.guard = LockoutGuard()

    def test_counts_below_threshold_without_locking(self):
        state = _fail(self.guard, LockoutState(), 4)

        assert state.failed_login_count == 4
        assert state.locked_until is None
        assert self.guard.attempts_left(state) == 1

    def test_fifth_failure_locks_for_thirty_minutes(self):
        state = _fail(self.guard, LockoutState(), 5)

        assert state.failed_login_count == 5
        assert state.locked_until == NOW + timedelta(minutes=30)
        assert state.is_locked(NOW)
        assert self.guard.attempts_left(state) == 0

    def test_failure_while_locked_changes_nothing(self):
        locked = _fail(self.guard, LockoutState(), 5)

        later = NOW + timedelta(minutes=10)
        assert self.guard.record_failure(locked, later) == locked

    def test_custom_threshold_and_duration(self):
        guard = LockoutGuard(threshold=3, lockout_duration=timedelta(minutes=15))

        state = _fail(guard, LockoutState(), 3)

        assert state.locked_until == NOW + timedelta(minutes=15)

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValueError, match="at least 1"):
            LockoutGuard(threshold=0)


class TestCheckAccess:
    def setup_method(self):
        self.guard = LockoutGuard()

    def test_unlocked_state_passes_unchanged(self):
        state = LockoutState(failed_login_count=2)

        assert self.guard.check_access(state, NOW) is state

    def test_locked_state_raises_with_retry_after(self):
        locked = _fail(self.guard, LockoutState(), 5)

        with pytest.raises(AccountLockedError) as exc_info:
            self.guard.check_access(locked, NOW + timedelta(minutes=20))

        assert exc_info.value.retry_after == 600
        assert exc_info.value.locked_until == locked.locked_until

    def test_retry_after_rounds_up(self):
        locked = LockoutState(
            failed_login_count=5,
            locked_until=NOW + timedelta(seconds=10, milliseconds=1),
        )

        with pytest.raises(AccountLockedError) as exc_info:
            self.guard.check_access(locked, NOW)

        assert exc_info.value.retry_after == 11

    def test_elapsed_lock_is_cleared_lazily(self):
        locked = _fail(self.guard, LockoutState(), 5)

        state = self.guard.check_access(locked, NOW + timedelta(minutes=30))

        assert state.locked_until is None
        assert not state.is_locked(NOW + timedelta(minutes=30))

    def test_elapsed_lock_keeps_the_failure_count(self):
        """Only success or an admin unlock resets the counter."""
        locked = _fail(self.guard, LockoutState(), 5)
        after = NOW + timedelta(minutes=31)

        state = self.guard.check_access(locked, after)
        relocked = self.guard.record_failure(state, after)

        assert state.failed_login_count == 5
        assert relocked.is_locked(after)


class TestResets:
    def setup_method(self):
        self.guard = LockoutGuard()

    @pytest.mark.parametrize(
        "state",
        [
            LockoutState(),
            LockoutState(failed_login_count=3),
            LockoutState(failed_login_count=5, locked_until=NOW + timedelta(hours=1)),
        ],
    )
    def test_success_resets_from_any_state(self, state):
        assert self.guard.record_success(state) == LockoutState()

    def test_force_unlock_ignores_remaining_time(self):
        locked = _fail(self.guard, LockoutState(), 5)

        unlocked = self.guard.force_unlock(locked)

        assert unlocked == LockoutState()
        assert self.guard.check_access(unlocked, NOW) == LockoutState()
