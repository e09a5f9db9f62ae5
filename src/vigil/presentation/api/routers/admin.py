"""Admin router: account lockout, status, roles and security events."""

import logging
from uuid import UUID

from fastapi import APIRouter, Query, status

from vigil.presentation.api.dependencies import AdminUser, DBSession, LockoutGuardDep
from vigil.presentation.api.schemas.admin import (
    AssignRoleRequest,
    ChangeStatusRequest,
    CreateRoleRequest,
    RoleResponse,
    SecurityEventResponse,
    UpdateRoleRequest,
)
from vigil.presentation.api.schemas.auth import AccountResponse
from vigil_identity.application.commands import (
    AssignRoleCommand,
    ChangeAccountStatusCommand,
    CreateRoleCommand,
    DeleteRoleCommand,
    ForceUnlockCommand,
    RevokeRoleCommand,
    UpdateRoleCommand,
)
from vigil_identity.application.queries import (
    ListRolesQuery,
    ListSecurityEventsQuery,
)
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    SecurityEventRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------


@router.get(
    "/accounts",
    summary="List all accounts",
    responses={
        200: {"description": "List of all accounts"},
        403: {"description": "Admin access required"},
    },
)
async def list_accounts(
    _admin: AdminUser,  # Used for authorization check
    session: DBSession,
) -> list[AccountResponse]:
    accounts = await AccountRepositorySQLAlchemy(session).list_all()
    return [AccountResponse.from_account(account) for account in accounts]


@router.get(
    "/accounts/{account_id}",
    summary="Get one account",
    responses={
        200: {"description": "Account details"},
        404: {"description": "Account not found"},
    },
)
async def get_account(
    account_id: UUID,
    _admin: AdminUser,
    session: DBSession,
) -> AccountResponse:
    account = await AccountRepositorySQLAlchemy(session).get(account_id)
    return AccountResponse.from_account(account)


@router.post(
    "/accounts/{account_id}/unlock",
    summary="Clear an account's lockout",
    responses={
        200: {"description": "Account unlocked"},
        403: {"description": "Admin access required"},
        404: {"description": "Account not found"},
    },
)
async def unlock_account(
    account_id: UUID,
    admin: AdminUser,
    session: DBSession,
    lockout_guard: LockoutGuardDep,
) -> AccountResponse:
    """Reset the failed-login counter and lift any active lock."""
    command = ForceUnlockCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        event_repository=SecurityEventRepositorySQLAlchemy(session),
        lockout_guard=lockout_guard,
    )
    account = await command.execute(account_id, performed_by=admin.email)
    await session.commit()

    logger.info("Admin %s unlocked account %s", admin.email, account_id)
    return AccountResponse.from_account(account)


@router.patch(
    "/accounts/{account_id}/status",
    summary="Activate, deactivate or suspend an account",
    responses={
        200: {"description": "Status updated"},
        403: {"description": "Target is a super admin"},
        404: {"description": "Account not found"},
    },
)
async def change_account_status(
    account_id: UUID,
    request: ChangeStatusRequest,
    admin: AdminUser,
    session: DBSession,
) -> AccountResponse:
    command = ChangeAccountStatusCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        event_repository=SecurityEventRepositorySQLAlchemy(session),
    )
    account = await command.execute(
        account_id,
        request.status,
        performed_by=admin.email,
        actor_is_super_admin=admin.is_super_admin,
    )
    await session.commit()
    return AccountResponse.from_account(account)


@router.post(
    "/accounts/{account_id}/roles",
    summary="Assign a role to an account",
    responses={
        200: {"description": "Role assigned (no-op if already held)"},
        403: {"description": "super_admin requires a super admin"},
        404: {"description": "Account or role not found"},
    },
)
async def assign_role(
    account_id: UUID,
    request: AssignRoleRequest,
    admin: AdminUser,
    session: DBSession,
) -> AccountResponse:
    command = AssignRoleCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        role_repository=RoleRepositorySQLAlchemy(session),
        event_repository=SecurityEventRepositorySQLAlchemy(session),
    )
    account = await command.execute(
        account_id,
        request.role,
        performed_by=admin.email,
        actor_is_super_admin=admin.is_super_admin,
    )
    await session.commit()
    return AccountResponse.from_account(account)


@router.delete(
    "/accounts/{account_id}/roles/{role_name}",
    summary="Revoke a role from an account",
    responses={
        200: {"description": "Role revoked (no-op if not held)"},
        403: {"description": "super_admin requires a super admin"},
        404: {"description": "Account or role not found"},
    },
)
async def revoke_role(
    account_id: UUID,
    role_name: str,
    admin: AdminUser,
    session: DBSession,
) -> AccountResponse:
    command = RevokeRoleCommand(
        account_repository=AccountRepositorySQLAlchemy(session),
        role_repository=RoleRepositorySQLAlchemy(session),
        event_repository=SecurityEventRepositorySQLAlchemy(session),
    )
    account = await command.execute(
        account_id,
        role_name,
        performed_by=admin.email,
        actor_is_super_admin=admin.is_super_admin,
    )
    await session.commit()
    return AccountResponse.from_account(account)


@router.get(
    "/accounts/{account_id}/events",
    summary="Recent security events of an account",
    responses={
        200: {"description": "Events, newest first"},
        404: {"description": "Account not found"},
    },
)
async def list_account_events(
    account_id: UUID,
    _admin: AdminUser,
    session: DBSession,
    limit: int = Query(default=50, ge=1, le=500),
) -> list[SecurityEventResponse]:
    query = ListSecurityEventsQuery(
        account_repository=AccountRepositorySQLAlchemy(session),
        event_repository=SecurityEventRepositorySQLAlchemy(session),
    )
    events = await query.execute(account_id, limit=limit)
    return [SecurityEventResponse.from_event(event) for event in events]


# -----------------------------------------------------------------------------
# Roles
# -----------------------------------------------------------------------------


@router.get("/roles", summary="List roles")
async def list_roles(
    _admin: AdminUser,
    session: DBSession,
) -> list[RoleResponse]:
    roles = await ListRolesQuery(RoleRepositorySQLAlchemy(session)).execute()
    return [RoleResponse.from_role(role) for role in roles]


@router.post(
    "/roles",
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
    responses={
        201: {"description": "Role created"},
        409: {"description": "Role name already taken"},
    },
)
async def create_role(
    request: CreateRoleRequest,
    admin: AdminUser,
    session: DBSession,
) -> RoleResponse:
    command = CreateRoleCommand(RoleRepositorySQLAlchemy(session))
    role = await command.execute(
        name=request.name,
        description=request.description,
        level=request.level,
    )
    await session.commit()

    logger.info("Admin %s created role %s", admin.email, role.name)
    return RoleResponse.from_role(role)


@router.patch(
    "/roles/{role_id}",
    summary="Update a role",
    responses={
        200: {"description": "Role updated"},
        404: {"description": "Role not found"},
        409: {"description": "Role name already taken"},
        422: {"description": "System roles cannot be modified"},
    },
)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    _admin: AdminUser,
    session: DBSession,
) -> RoleResponse:
    command = UpdateRoleCommand(RoleRepositorySQLAlchemy(session))
    role = await command.execute(
        role_id,
        name=request.name,
        description=request.description,
        level=request.level,
    )
    await session.commit()
    return RoleResponse.from_role(role)


@router.delete(
    "/roles/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a role",
    responses={
        204: {"description": "Role deleted"},
        404: {"description": "Role not found"},
        422: {"description": "System role, or role still assigned"},
    },
)
async def delete_role(
    role_id: UUID,
    admin: AdminUser,
    session: DBSession,
) -> None:
    await DeleteRoleCommand(RoleRepositorySQLAlchemy(session)).execute(role_id)
    await session.commit()

    logger.info("Admin %s deleted role %s", admin.email, role_id)
