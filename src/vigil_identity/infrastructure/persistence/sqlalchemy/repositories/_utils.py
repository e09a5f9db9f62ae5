"""Shared utilities for SQLAlchemy repositories."""

from datetime import datetime
from typing import Optional

from vigil_identity.domain.shared.time import ensure_tz_aware


def aware_or_none(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None:
        return None
    return ensure_tz_aware(value)
