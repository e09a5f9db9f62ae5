"""Application queries (read-only use cases)."""

from vigil_identity.application.queries.list_roles_query import ListRolesQuery
from vigil_identity.application.queries.list_security_events_query import (
    ListSecurityEventsQuery,
)

__all__ = [
    "ListRolesQuery",
    "ListSecurityEventsQuery",
]
