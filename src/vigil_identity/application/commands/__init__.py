"""Application commands (state-changing use cases)."""

from vigil_identity.application.commands.admin import (
    AssignRoleCommand,
    ChangeAccountStatusCommand,
    CreateRoleCommand,
    DeleteRoleCommand,
    ForceUnlockCommand,
    RevokeRoleCommand,
    SeedSystemRolesCommand,
    UpdateRoleCommand,
)

__all__ = [
    "AssignRoleCommand",
    "ChangeAccountStatusCommand",
    "CreateRoleCommand",
    "DeleteRoleCommand",
    "ForceUnlockCommand",
    "RevokeRoleCommand",
    "SeedSystemRolesCommand",
    "UpdateRoleCommand",
]
