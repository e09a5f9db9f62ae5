"""SQLAlchemy implementation of SecurityEventRepository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vigil_identity.domain.account import (
    SecurityEvent,
    SecurityEventRepository,
    SecurityEventType,
)
from vigil_identity.domain.shared.time import ensure_tz_aware
from vigil_identity.infrastructure.persistence.sqlalchemy.models import (
    SecurityEventModel,
)


class SecurityEventRepositorySQLAlchemy(SecurityEventRepository):
    """SQLAlchemy implementation of the SecurityEventRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, event: SecurityEvent) -> None:
        self._session.add(
            SecurityEventModel(
                id=event.id,
                account_id=event.account_id,
                event_type=event.event_type.value,
                details=dict(event.details),
                occurred_at=event.occurred_at,
            ),
        )
        await self._session.flush()

    async def list_for_account(
        self,
        account_id: UUID,
        limit: int = 50,
    ) -> list[SecurityEvent]:
        stmt = (
            select(SecurityEventModel)
            .where(SecurityEventModel.account_id == account_id)
            .order_by(SecurityEventModel.occurred_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            SecurityEvent(
                id=model.id,
                account_id=model.account_id,
                event_type=SecurityEventType(model.event_type),
                details=dict(model.details or {}),
                occurred_at=ensure_tz_aware(model.occurred_at),
            )
            for model in result.scalars().all()
        ]
