from vigil_identity.domain.account.entities.security_event import (
    SecurityEvent,
    SecurityEventType,
)

__all__ = ["SecurityEvent", "SecurityEventType"]
