from vigil_identity.application.commands.admin.assign_role_command import (
    AssignRoleCommand,
)
from vigil_identity.application.commands.admin.change_account_status_command import (
    ChangeAccountStatusCommand,
)
from vigil_identity.application.commands.admin.create_role_command import (
    CreateRoleCommand,
)
from vigil_identity.application.commands.admin.delete_role_command import (
    DeleteRoleCommand,
)
from vigil_identity.application.commands.admin.force_unlock_command import (
    ForceUnlockCommand,
)
from vigil_identity.application.commands.admin.revoke_role_command import (
    RevokeRoleCommand,
)
from vigil_identity.application.commands.admin.seed_system_roles_command import (
    SeedSystemRolesCommand,
)
from vigil_identity.application.commands.admin.update_role_command import (
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
