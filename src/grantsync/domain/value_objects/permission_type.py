"""Wire permission types."""

from enum import StrEnum


class PermissionType(StrEnum):
    """Permission types known to the authorization API."""

    WORKER = "WorkerPermission"
    CREATOR = "CreatorPermission"
    STATUS_OWNER = "StatusOwnerPermission"
    EXECUTOR = "ExecutorPermission"
    FIELD_OWNER = "FieldOwnerPermission"
    FIELD_STATUS = "FieldStatusPermission"


_NAME_TO_TYPE: dict[str, PermissionType] = {
    "Workers": PermissionType.WORKER,
    "Creators": PermissionType.CREATOR,
    "Status Owners": PermissionType.STATUS_OWNER,
    "Executors": PermissionType.EXECUTOR,
    "Field Owners": PermissionType.FIELD_OWNER,
    "Editors": PermissionType.FIELD_STATUS,
    "Viewers": PermissionType.FIELD_STATUS,
}

_WIRE_TYPES = frozenset(t.value for t in PermissionType)


def resolve_permission_type(permission_name: str | None) -> str | None:
    """Map a permission display name to its wire type.

    Wire types pass through unchanged, unknown names fall back to their
    upper-cased form, blank names give None.
    """
    if not permission_name or not permission_name.strip():
        return None
    if permission_name in _WIRE_TYPES:
        return permission_name
    mapped = _NAME_TO_TYPE.get(permission_name)
    if mapped is not None:
        return mapped.value
    return permission_name.upper()
