"""
Permission capabilities and the pure permission check.

Permissions are stored on the user as an integer bitmask. ADMIN implies
every other permission.
"""

from collections.abc import Iterable
from enum import IntFlag
from typing import Literal

PermissionMode = Literal["and", "or"]


class Permission(IntFlag):
    NONE = 0
    ADMIN = 2
    MANAGE_SETTINGS = 4
    MANAGE_USERS = 8
    MANAGE_REQUESTS = 16
    REQUEST = 32
    MANAGE_ISSUES = 1048576
    VIEW_ISSUES = 2097152
    CREATE_ISSUES = 4194304


def has_permission(
    user_permissions: int,
    required: Permission | Iterable[Permission],
    mode: PermissionMode = "and",
) -> bool:
    """
    Check a permission bitmask against one or more required permissions.

    Args:
        user_permissions: The user's permission bitmask.
        required: A single permission or a collection of permissions.
        mode: "and" requires every permission, "or" requires at least one.

    Returns:
        True if the bitmask satisfies the request. ADMIN satisfies everything.
    """
    if user_permissions & Permission.ADMIN:
        return True

    if isinstance(required, Permission):
        required = [required]
    required = list(required)

    if not required:
        return True

    checks = ((user_permissions & permission) == permission for permission in required)
    if mode == "or":
        return any(checks)
    return all(checks)


__all__ = ["Permission", "PermissionMode", "has_permission"]
