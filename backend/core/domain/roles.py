"""Organization role hierarchy and permissions."""
from enum import Enum
from typing import Optional


class OrganizationRoleName(str, Enum):
    """System roles, highest authority first (owner outranks admin, and so on)."""
    OWNER = "owner"
    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"
    VIEWER = "viewer"


class Permission(str, Enum):
    """Permissions checked by the delete paths."""
    ORGANIZATION_DELETE = "organizations.delete"
    PROJECTS_DELETE = "projects.delete"
    TASKS_DELETE = "tasks.delete"


ROLE_PERMISSIONS: dict[OrganizationRoleName, frozenset[Permission]] = {
    OrganizationRoleName.OWNER: frozenset(Permission),
    OrganizationRoleName.ADMIN: frozenset({
        Permission.PROJECTS_DELETE,
        Permission.TASKS_DELETE,
    }),
    OrganizationRoleName.MODERATOR: frozenset({Permission.TASKS_DELETE}),
    OrganizationRoleName.MEMBER: frozenset(),
    OrganizationRoleName.VIEWER: frozenset(),
}


def parse_role(value: Optional[str]) -> Optional[OrganizationRoleName]:
    """Return the role for a stored string, or None for unknown values."""
    if value is None:
        return None
    try:
        return OrganizationRoleName(value)
    except ValueError:
        return None


def has_permission(role: Optional[str], permission: Permission) -> bool:
    """Check whether a stored role string grants a permission."""
    parsed = parse_role(role)
    if parsed is None:
        return False
    return permission in ROLE_PERMISSIONS[parsed]