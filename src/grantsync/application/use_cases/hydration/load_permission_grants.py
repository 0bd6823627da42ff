"""Load the grant and role state of a permission into the editing stores."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from grantsync.application.authorization_api import AuthorizationApi
from grantsync.application.ports import Transport
from grantsync.application.state import Baseline, PermissionGrantState, ScopeComposition
from grantsync.domain.entities import Group, Permission, PermissionAssignment, Role
from grantsync.domain.exceptions import MalformedResponseError, RemoteError
from grantsync.domain.value_objects import AssignmentKey, Scope

logger = logging.getLogger(__name__)


@dataclass
class LoadToken:
    """Staleness flag captured when a load starts; gates every state write."""

    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(frozen=True)
class LoadRequest:
    """Permission and scope selected for editing."""

    permission: Permission | None
    scope: Scope = Scope.TENANT
    project_id: int | None = None
    item_type_set_id: int | None = None


def assignment_key(
    permission: Permission,
    project_id: int | None = None,
    item_type_set_id: int | None = None,
) -> AssignmentKey | None:
    """Wire identity of a permission, or None when id or type is unusable."""
    if not permission.has_valid_id or not permission.wire_type:
        return None
    return AssignmentKey(
        permission_type=permission.wire_type,
        permission_id=permission.id,
        project_id=project_id,
        item_type_set_id=item_type_set_id,
    )


class LoadPermissionGrantsUseCase:
    """Hydrate a ``PermissionGrantState`` for the selected permission and scope.

    Fetch failures never block editing: a 404 means "nothing assigned" and
    any other failure is logged and treated the same way.
    """

    def __init__(self, transport: Transport) -> None:
        self._api = AuthorizationApi(transport)

    async def execute(
        self,
        state: PermissionGrantState,
        request: LoadRequest,
        token: LoadToken | None = None,
    ) -> None:
        token = token or LoadToken()
        state.reset()
        state.permission = request.permission
        state.item_type_set_id = request.item_type_set_id
        state.composition = ScopeComposition.for_permission(
            request.permission, request.scope, request.project_id
        )
        state.loading = True
        state.error = None

        try:
            roles, groups = await asyncio.gather(self._load_roles(), self._load_groups())
            if token.cancelled:
                return
            state.available_roles = roles
            state.available_groups = groups

            permission = request.permission
            if permission is None:
                return
            key = assignment_key(permission, request.project_id, request.item_type_set_id)
            if key is None:
                logger.warning("Cannot load permission %r: missing id or type", permission.name)
                return

            if state.composition.loads_global_roles:
                await self._load_tenant_scope(state, permission, key, token)
            else:
                await self._load_project_scope(state, permission, key, token)
        finally:
            if not token.cancelled:
                state.loading = False

    async def _load_tenant_scope(
        self,
        state: PermissionGrantState,
        permission: Permission,
        key: AssignmentKey,
        token: LoadToken,
    ) -> None:
        assignment = await self._load_assignment(self._api.fetch_assignment, key, "global")
        if token.cancelled:
            return
        roles = assignment.roles if assignment else permission.assigned_roles
        had_grant = permission.has_global_grant or bool(assignment and assignment.grant)
        state.selected_roles.replace(roles)
        if assignment and had_grant:
            state.grant.replace(assignment.grant_collections)
        state.project_grant.reset()
        state.baseline = Baseline(
            original_roles=state.selected_roles.roles,
            had_grant=had_grant,
        )

    async def _load_project_scope(
        self,
        state: PermissionGrantState,
        permission: Permission,
        key: AssignmentKey,
        token: LoadToken,
    ) -> None:
        had_project_grant = False
        if state.composition.project_active:
            project = await self._load_assignment(
                self._api.fetch_project_assignment, key, "project"
            )
            if token.cancelled:
                return
            if project:
                state.selected_roles.replace(project.roles)
                state.project_grant.replace(project.grant_collections)
            had_project_grant = permission.has_initial_project_grant or bool(
                project and project.grant
            )

        if state.composition.loads_global_grant:
            assignment = await self._load_assignment(self._api.fetch_assignment, key, "global")
            if token.cancelled:
                return
            if assignment:
                state.grant.replace(assignment.grant_collections)
        else:
            state.grant.reset()

        state.baseline = Baseline(
            original_roles=state.selected_roles.roles,
            had_grant=permission.has_global_grant,
            had_project_grant=had_project_grant,
        )

    async def _load_assignment(
        self,
        fetch: Callable[[AssignmentKey], Awaitable[PermissionAssignment]],
        key: AssignmentKey,
        label: str,
    ) -> PermissionAssignment | None:
        try:
            return await fetch(key)
        except RemoteError as e:
            if e.is_not_found:
                logger.debug("No %s assignment for %s/%s", label, key.permission_type, key.permission_id)
            else:
                logger.error(
                    "Error fetching %s assignment for %s/%s: %s",
                    label,
                    key.permission_type,
                    key.permission_id,
                    e,
                )
        except MalformedResponseError as e:
            logger.error("Discarding malformed %s assignment: %s", label, e)
        return None

    async def _load_roles(self) -> list[Role]:
        try:
            return await self._api.list_roles()
        except (RemoteError, MalformedResponseError) as e:
            logger.error("Error fetching roles: %s", e)
            return []

    async def _load_groups(self) -> list[Group]:
        try:
            return await self._api.list_groups()
        except (RemoteError, MalformedResponseError) as e:
            logger.error("Error fetching groups: %s", e)
            return []
