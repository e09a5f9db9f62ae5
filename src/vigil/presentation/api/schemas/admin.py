"""Schemas for account and role administration."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from vigil_identity.domain.account import Role, SecurityEvent


class ChangeStatusRequest(BaseModel):
    status: Literal["active", "inactive", "suspended"]


class AssignRoleRequest(BaseModel):
    role: str = Field(..., min_length=1, max_length=50)


class CreateRoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(default="", max_length=255)
    level: int = Field(default=0, ge=0, lt=1000)


class UpdateRoleRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=255)
    level: int | None = Field(default=None, ge=0, lt=1000)


class RoleResponse(BaseModel):
    id: UUID
    name: str
    description: str
    level: int
    is_system_role: bool

    @classmethod
    def from_role(cls, role: Role) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            level=role.level,
            is_system_role=role.is_system_role,
        )


class SecurityEventResponse(BaseModel):
    id: UUID
    event_type: str
    occurred_at: datetime
    details: dict[str, Any]

    @classmethod
    def from_event(cls, event: SecurityEvent) -> "SecurityEventResponse":
        return cls(
            id=event.id,
            event_type=event.event_type.value,
            occurred_at=event.occurred_at,
            details=event.details,
        )
