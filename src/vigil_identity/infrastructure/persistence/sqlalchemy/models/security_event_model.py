"""SQLAlchemy model for security events."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vigil_identity.domain.shared.time import utc_now
from vigil_identity.infrastructure.persistence.sqlalchemy.models.base import Base


class SecurityEventModel(Base):
    """Append-only row per security event."""

    __tablename__ = "security_events"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    account_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    event_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    details: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        default=dict,
        nullable=False,
    )
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<SecurityEventModel(id={self.id}, type={self.event_type}, "
            f"account_id={self.account_id})>"
        )
