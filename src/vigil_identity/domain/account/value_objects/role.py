"""Role value object and the built-in role names."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"


@dataclass(frozen=True)
class Role:
    """A named role. Equality is by id.

    System roles are seeded at install time and are protected from
    mutation and deletion.
    """

    name: str
    is_system_role: bool = False
    level: int = 0
    description: str = ""
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


# Seeded by SeedSystemRolesCommand: (name, level, description)
SYSTEM_ROLES: tuple[tuple[str, int, str], ...] = (
    (ROLE_USER, 1, "Regular user with basic access"),
    (ROLE_ADMIN, 100, "Administrator with elevated privileges"),
    (ROLE_SUPER_ADMIN, 1000, "Super administrator with full system access"),
)

DEFAULT_ROLE = ROLE_USER
