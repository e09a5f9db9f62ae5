"""Security event entity: one append-only record per security-relevant action."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from vigil_identity.domain.shared.time import utc_now


class SecurityEventType(str, Enum):
    REGISTERED = "registered"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGIN_REJECTED = "login_rejected"
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_UNLOCKED = "account_unlocked"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET = "password_reset"
    EMAIL_VERIFIED = "email_verified"
    EXTERNAL_LOGIN = "external_login"
    SUPER_ADMIN_LOGIN = "super_admin_login"
    ROLE_ASSIGNED = "role_assigned"
    ROLE_REVOKED = "role_revoked"
    STATUS_CHANGED = "status_changed"


@dataclass(frozen=True)
class SecurityEvent:
    event_type: SecurityEventType
    account_id: UUID | None = None
    details: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=utc_now)
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def for_account(
        cls,
        event_type: SecurityEventType,
        account_id: UUID,
        **details: Any,
    ) -> SecurityEvent:
        return cls(event_type=event_type, account_id=account_id, details=details)
