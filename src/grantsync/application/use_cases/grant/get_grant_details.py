"""Get grant details use case."""

from grantsync.application.authorization_api import AuthorizationApi
from grantsync.application.ports import Transport
from grantsync.domain.entities import GrantDetails, Permission
from grantsync.domain.exceptions import NotFound, RemoteError, ValidationError
from grantsync.domain.value_objects import AssignmentKey


class GetGrantDetailsUseCase:
    """Fetch the grant membership of a permission, globally or for one project."""

    def __init__(self, transport: Transport) -> None:
        self._api = AuthorizationApi(transport)

    async def execute(self, permission: Permission, project_id: int | None = None) -> GrantDetails:
        """Return the grant; raises NotFound when there is no assignment or no grant."""
        if not permission.has_valid_id or not permission.wire_type:
            raise ValidationError("Permission without id or permission type")

        key = AssignmentKey(
            permission_type=permission.wire_type,
            permission_id=permission.id,
            project_id=project_id,
        )
        label = f"{key.permission_type}/{key.permission_id}"
        if project_id is not None:
            label = f"{label}/project/{project_id}"

        try:
            if project_id is None:
                assignment = await self._api.fetch_assignment(key)
            else:
                assignment = await self._api.fetch_project_assignment(key)
        except RemoteError as e:
            if e.is_not_found:
                raise NotFound("Assignment", label) from e
            raise

        if assignment.grant is None:
            raise NotFound("Grant", label)
        return assignment.grant
