"""SQLAlchemy model for the Account aggregate."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vigil_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from vigil_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    account_roles,
)


class AccountModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    Credentials and lockout state live on the account row so that one row
    lock covers everything a login attempt reads and writes.
    """

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint(
            "external_provider",
            "external_subject",
            name="uq_accounts_external_identity",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Newest last; the current hash is included
    password_history: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    password_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    failed_login_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    locked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    external_provider: Mapped[str | None] = mapped_column(String(50), nullable=True)
    external_subject: Mapped[str | None] = mapped_column(String(255), nullable=True)

    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    roles: Mapped[list[RoleModel]] = relationship(
        RoleModel,
        secondary=account_roles,
        lazy="selectin",
        order_by=RoleModel.name,
    )

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, email={self.email})>"
