"""Typed client for the authorization API endpoints."""

from grantsync.application.dto.assignment_dto import (
    decode_assignment,
    decode_groups,
    decode_roles,
)
from grantsync.application.ports import Transport
from grantsync.domain.entities import Group, PermissionAssignment, Role
from grantsync.domain.exceptions import ValidationError
from grantsync.domain.value_objects import AssignmentKey, GrantCollectionKey, GrantCollections

_GRANT_FIELDS = {
    GrantCollectionKey.USERS: "userIds",
    GrantCollectionKey.GROUPS: "groupIds",
    GrantCollectionKey.NEGATED_USERS: "negatedUserIds",
    GrantCollectionKey.NEGATED_GROUPS: "negatedGroupIds",
}


def grant_payload(key: AssignmentKey, collections: GrantCollections) -> dict:
    """Build a create-and-assign-grant body; empty lists are omitted."""
    payload: dict = {
        "permissionType": key.permission_type,
        "permissionId": key.permission_id,
    }
    for collection_key, field_name in _GRANT_FIELDS.items():
        ids = collections.ids(collection_key)
        if ids:
            payload[field_name] = ids
    return payload


def _require_project(key: AssignmentKey) -> int:
    if key.project_id is None:
        raise ValidationError("Project scoped call requires a project id")
    return key.project_id


class AuthorizationApi:
    """One method per endpoint; responses are decoded into domain entities."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    # --- reads ---

    async def fetch_assignment(self, key: AssignmentKey) -> PermissionAssignment:
        data = await self._transport.get(
            f"/permission-assignments/{key.permission_type}/{key.permission_id}"
        )
        return decode_assignment(data)

    async def fetch_project_assignment(self, key: AssignmentKey) -> PermissionAssignment:
        project_id = _require_project(key)
        data = await self._transport.get(
            f"/project-permission-assignments/{key.permission_type}/{key.permission_id}"
            f"/project/{project_id}"
        )
        return decode_assignment(data)

    async def list_roles(self) -> list[Role]:
        return decode_roles(await self._transport.get("/itemtypeset-permissions/roles"))

    async def list_groups(self) -> list[Group]:
        return decode_groups(await self._transport.get("/groups"))

    # --- global writes ---

    async def create_and_assign_grant(
        self, key: AssignmentKey, collections: GrantCollections
    ) -> None:
        await self._transport.post(
            "/permission-assignments/create-and-assign-grant",
            json=grant_payload(key, collections),
        )

    async def update_assignment(
        self, key: AssignmentKey, role_ids: list[int], grant_id: int | None
    ) -> None:
        await self._transport.post(
            "/permission-assignments",
            json={
                "permissionType": key.permission_type,
                "permissionId": key.permission_id,
                "roleIds": role_ids,
                "grantId": grant_id,
            },
        )

    async def delete_assignment(self, key: AssignmentKey) -> None:
        await self._transport.delete(
            f"/permission-assignments/{key.permission_type}/{key.permission_id}"
        )

    async def assign_role(self, key: AssignmentKey, role_id: int) -> None:
        await self._transport.post(
            "/itemtypeset-permissions/assign-role",
            params=self._role_params(key, role_id),
        )

    async def remove_role(self, key: AssignmentKey, role_id: int) -> None:
        await self._transport.delete(
            "/itemtypeset-permissions/remove-role",
            params=self._role_params(key, role_id),
        )

    # --- project writes ---

    async def create_and_assign_project_grant(
        self, key: AssignmentKey, collections: GrantCollections
    ) -> None:
        payload = grant_payload(key, collections)
        payload["projectId"] = _require_project(key)
        payload["itemTypeSetId"] = key.item_type_set_id
        await self._transport.post(
            "/project-permission-assignments/create-and-assign-grant",
            json=payload,
        )

    async def save_project_roles(
        self, key: AssignmentKey, role_ids: list[int], grant_id: int | None = None
    ) -> None:
        payload = {
            "permissionType": key.permission_type,
            "permissionId": key.permission_id,
            "projectId": _require_project(key),
            "itemTypeSetId": key.item_type_set_id,
            "roleIds": role_ids,
        }
        if grant_id is not None:
            payload["grantId"] = grant_id
        await self._transport.post("/project-permission-assignments", json=payload)

    async def delete_project_assignment(self, key: AssignmentKey) -> None:
        project_id = _require_project(key)
        await self._transport.delete(
            f"/project-permission-assignments/{key.permission_type}/{key.permission_id}"
            f"/project/{project_id}"
        )

    @staticmethod
    def _role_params(key: AssignmentKey, role_id: int) -> dict:
        return {
            "permissionId": key.permission_id,
            "roleId": role_id,
            "permissionType": key.permission_type,
        }
