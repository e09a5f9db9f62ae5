"""SQLAlchemy model for roles and the account/role association table."""

from uuid import UUID

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from vigil_identity.domain.shared.time import utc_now
from vigil_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

account_roles = Table(
    "account_roles",
    Base.metadata,
    Column(
        "account_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
    Column("assigned_at", DateTime(timezone=True), default=utc_now, nullable=False),
)


class RoleModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting roles."""

    __tablename__ = "roles"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    is_system_role: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, name={self.name}, level={self.level})>"
