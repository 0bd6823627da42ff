"""Persist edited grants and roles of a permission."""

import logging

from grantsync.application.authorization_api import AuthorizationApi
from grantsync.application.ports import Transport
from grantsync.application.state import PermissionGrantState
from grantsync.domain.exceptions import (
    MalformedResponseError,
    PersistenceError,
    RemoteError,
    ValidationError,
    error_message,
)
from grantsync.domain.services import (
    AssignRole,
    CreateAndAssignGrant,
    DeleteAssignment,
    Operation,
    ReconciliationInput,
    RemoveRole,
    SaveProjectRoles,
    UpdateAssignment,
    reconcile,
)
from grantsync.domain.value_objects import AssignmentKey, GrantTarget

logger = logging.getLogger(__name__)


class PersistAssignmentsUseCase:
    """Reconcile the editing state against its baseline and apply the result.

    Operations run one at a time in stage order (global grant, project grant,
    project roles, global roles). The first hard failure stops the sequence;
    steps already applied are not rolled back.
    """

    def __init__(self, transport: Transport) -> None:
        self._api = AuthorizationApi(transport)

    async def execute(self, state: PermissionGrantState) -> bool:
        """Save ``state``. Returns False and fills ``state.error`` on failure."""
        if state.loading:
            logger.warning("Save refused: a load or save is already in progress")
            return False

        state.loading = True
        state.error = None
        try:
            key = self.validate(state)
            operations = reconcile(self.reconciliation_input(state))
            await self.run(key, operations)
        except (ValidationError, PersistenceError) as e:
            state.error = str(e)
            logger.error("Error saving permission assignments: %s", e)
            return False
        else:
            state.commit_baseline()
            return True
        finally:
            state.loading = False

    @staticmethod
    def validate(state: PermissionGrantState) -> AssignmentKey:
        """Check everything a save needs before touching the network."""
        permission = state.permission
        if permission is None:
            raise ValidationError("Permission not available. Reopen the editor and try again.")
        if not permission.has_valid_id:
            raise ValidationError(
                f"Invalid permission id: {permission.id!r}. "
                "Reload the permission list and try again."
            )
        permission_type = permission.wire_type
        if not permission_type:
            raise ValidationError(f"Unrecognized permission type: {permission.name!r}")

        composition = state.composition
        if composition.is_project:
            if composition.project_id is None:
                raise ValidationError("Project scope requires a project id")
            if state.item_type_set_id is None:
                raise ValidationError("Project scope requires an item type set id")

        return AssignmentKey(
            permission_type=permission_type,
            permission_id=permission.id,
            project_id=composition.project_id,
            item_type_set_id=state.item_type_set_id,
        )

    @staticmethod
    def reconciliation_input(state: PermissionGrantState) -> ReconciliationInput:
        return ReconciliationInput(
            scope=state.composition.scope,
            original_roles=state.baseline.original_roles,
            current_roles=state.selected_roles.roles,
            grant=state.grant.snapshot(),
            had_grant=state.baseline.had_grant,
            project_grant=state.project_grant.snapshot(),
            had_project_grant=state.baseline.had_project_grant,
        )

    async def run(self, key: AssignmentKey, operations: list[Operation]) -> None:
        """Execute ``operations`` in order, raising ``PersistenceError`` on the first hard failure."""
        for operation in operations:
            logger.debug("Applying %s to %s/%s", operation, key.permission_type, key.permission_id)
            try:
                await self._apply(key, operation)
            except (RemoteError, MalformedResponseError) as e:
                raise PersistenceError(operation.stage.label, error_message(e)) from e

    async def _apply(self, key: AssignmentKey, operation: Operation) -> None:
        if isinstance(operation, CreateAndAssignGrant):
            if operation.target is GrantTarget.GRANT:
                await self._api.create_and_assign_grant(key, operation.collections)
            else:
                await self._api.create_and_assign_project_grant(key, operation.collections)
        elif isinstance(operation, UpdateAssignment):
            await self._api.update_assignment(key, list(operation.role_ids), operation.grant_id)
        elif isinstance(operation, DeleteAssignment):
            await self._delete_assignment(key, operation.target)
        elif isinstance(operation, SaveProjectRoles):
            grant_id = None
            if operation.preserve_grant:
                grant_id = await self._current_project_grant_id(key)
            await self._api.save_project_roles(key, list(operation.role_ids), grant_id)
        elif isinstance(operation, RemoveRole):
            try:
                await self._api.remove_role(key, operation.role_id)
            except RemoteError as e:
                if not e.is_not_found:
                    raise
                logger.info(
                    "Role %s already removed from %s/%s",
                    operation.role_id,
                    key.permission_type,
                    key.permission_id,
                )
        elif isinstance(operation, AssignRole):
            await self._api.assign_role(key, operation.role_id)
        else:
            raise TypeError(f"Unsupported operation: {operation!r}")

    async def _delete_assignment(self, key: AssignmentKey, target: GrantTarget) -> None:
        try:
            if target is GrantTarget.GRANT:
                await self._api.delete_assignment(key)
            else:
                await self._api.delete_project_assignment(key)
        except RemoteError as e:
            logger.warning("Warning removing empty %s assignment: %s", target, e)

    async def _current_project_grant_id(self, key: AssignmentKey) -> int | None:
        """Grant id currently persisted on the project assignment, if any."""
        try:
            assignment = await self._api.fetch_project_assignment(key)
        except RemoteError as e:
            if not e.is_not_found:
                logger.warning("Warning fetching existing assignment for grant preservation: %s", e)
            return None
        except MalformedResponseError as e:
            logger.warning("Warning fetching existing assignment for grant preservation: %s", e)
            return None
        return assignment.grant_id
