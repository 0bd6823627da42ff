"""Domain value objects."""

from grantsync.domain.value_objects.assignment_key import AssignmentKey
from grantsync.domain.value_objects.grant_collections import (
    GrantCollectionKey,
    GrantCollections,
)
from grantsync.domain.value_objects.permission_type import (
    PermissionType,
    resolve_permission_type,
)
from grantsync.domain.value_objects.scope import GrantTarget, Scope

__all__ = [
    "AssignmentKey",
    "GrantCollectionKey",
    "GrantCollections",
    "GrantTarget",
    "PermissionType",
    "Scope",
    "resolve_permission_type",
]
