"""Domain entities."""

from grantsync.domain.entities.assignment import GrantDetails, PermissionAssignment
from grantsync.domain.entities.group import Group
from grantsync.domain.entities.permission import Permission
from grantsync.domain.entities.role import Role
from grantsync.domain.entities.user import UserRef

__all__ = [
    "GrantDetails",
    "Group",
    "Permission",
    "PermissionAssignment",
    "Role",
    "UserRef",
]
