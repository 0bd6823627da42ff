"""Reconciliation of persisted vs edited grants and roles.

Pure functions only: given the baseline and the edited state of one
permission, compute the ordered list of remote operations that moves the
server from the former to the latter. Executing them is the job of the
persistence use case.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from grantsync.domain.entities import Role
from grantsync.domain.value_objects import GrantCollections, GrantTarget, Scope


class SaveStage(IntEnum):
    """Save phases, in execution order."""

    GLOBAL_GRANT = 1
    PROJECT_GRANT = 2
    PROJECT_ROLES = 3
    GLOBAL_ROLES = 4

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    SaveStage.GLOBAL_GRANT: "global grant",
    SaveStage.PROJECT_GRANT: "project grant",
    SaveStage.PROJECT_ROLES: "project role sync",
    SaveStage.GLOBAL_ROLES: "global role sync",
}


class GrantTransition(Enum):
    """How a grant moves from its persisted to its edited state."""

    NONE = "none"
    CREATE = "create"
    REPLACE = "replace"
    DETACH = "detach"
    DELETE = "delete"


@dataclass(frozen=True)
class CreateAndAssignGrant:
    """Create a grant with the given membership and assign it (replaces any existing one)."""

    target: GrantTarget
    collections: GrantCollections
    replaces_existing: bool = False

    @property
    def stage(self) -> SaveStage:
        if self.target is GrantTarget.GRANT:
            return SaveStage.GLOBAL_GRANT
        return SaveStage.PROJECT_GRANT


@dataclass(frozen=True)
class UpdateAssignment:
    """Rewrite the global assignment: keep roles, set the grant reference."""

    role_ids: tuple[int, ...]
    grant_id: int | None = None

    @property
    def stage(self) -> SaveStage:
        return SaveStage.GLOBAL_GRANT


@dataclass(frozen=True)
class DeleteAssignment:
    """Delete the whole assignment at the target's scope. Failures are warnings."""

    target: GrantTarget

    @property
    def stage(self) -> SaveStage:
        if self.target is GrantTarget.GRANT:
            return SaveStage.GLOBAL_GRANT
        return SaveStage.PROJECT_GRANT


@dataclass(frozen=True)
class SaveProjectRoles:
    """Write the project role set.

    With ``preserve_grant`` the persisted project assignment is re-read right
    before the write and its grant id is carried forward.
    """

    role_ids: tuple[int, ...]
    preserve_grant: bool = True

    @property
    def stage(self) -> SaveStage:
        return SaveStage.PROJECT_ROLES


@dataclass(frozen=True)
class AssignRole:
    """Add one role to the global assignment."""

    role_id: int

    @property
    def stage(self) -> SaveStage:
        return SaveStage.GLOBAL_ROLES


@dataclass(frozen=True)
class RemoveRole:
    """Remove one role from the global assignment. 404 means already removed."""

    role_id: int

    @property
    def stage(self) -> SaveStage:
        return SaveStage.GLOBAL_ROLES


Operation = (
    CreateAndAssignGrant
    | UpdateAssignment
    | DeleteAssignment
    | SaveProjectRoles
    | AssignRole
    | RemoveRole
)


@dataclass(frozen=True)
class RoleDiff:
    """Role ids to remove and to add, in their original order."""

    to_remove: tuple[int, ...] = ()
    to_add: tuple[int, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.to_remove or self.to_add)


@dataclass(frozen=True)
class ReconciliationInput:
    """Baseline and edited state of one permission at one scope."""

    scope: Scope
    original_roles: Sequence[Role]
    current_roles: Sequence[Role]
    grant: GrantCollections = field(default_factory=GrantCollections)
    had_grant: bool = False
    project_grant: GrantCollections = field(default_factory=GrantCollections)
    had_project_grant: bool = False


def _unique_ids(roles: Sequence[Role]) -> list[int]:
    seen: set[int] = set()
    ids = []
    for role in roles:
        if role.id not in seen:
            seen.add(role.id)
            ids.append(role.id)
    return ids


def diff_roles(original: Sequence[Role], current: Sequence[Role]) -> RoleDiff:
    """Compare role sets by id, ignoring object identity and order."""
    original_ids = _unique_ids(original)
    current_ids = _unique_ids(current)
    original_set = set(original_ids)
    current_set = set(current_ids)
    return RoleDiff(
        to_remove=tuple(i for i in original_ids if i not in current_set),
        to_add=tuple(i for i in current_ids if i not in original_set),
    )


def grant_transition(
    current: GrantCollections, had_original: bool, has_roles: bool
) -> GrantTransition:
    """Classify the grant change for one scope."""
    if not current.is_empty:
        return GrantTransition.REPLACE if had_original else GrantTransition.CREATE
    if not had_original:
        return GrantTransition.NONE
    if has_roles:
        return GrantTransition.DETACH
    return GrantTransition.DELETE


def _plan_tenant(request: ReconciliationInput, role_diff: RoleDiff) -> list[Operation]:
    role_ids = tuple(_unique_ids(request.current_roles))
    transition = grant_transition(request.grant, request.had_grant, bool(role_ids))
    operations: list[Operation] = []

    if transition in (GrantTransition.CREATE, GrantTransition.REPLACE):
        operations.append(
            CreateAndAssignGrant(
                target=GrantTarget.GRANT,
                collections=request.grant,
                replaces_existing=transition is GrantTransition.REPLACE,
            )
        )
    elif transition is GrantTransition.DETACH:
        # The assignment write carries the full role set.
        operations.append(UpdateAssignment(role_ids=role_ids, grant_id=None))
        return operations
    elif transition is GrantTransition.DELETE:
        return [DeleteAssignment(target=GrantTarget.GRANT)]

    operations.extend(RemoveRole(role_id) for role_id in role_diff.to_remove)
    operations.extend(AssignRole(role_id) for role_id in role_diff.to_add)
    return operations


def _plan_project(request: ReconciliationInput, role_diff: RoleDiff) -> list[Operation]:
    role_ids = tuple(_unique_ids(request.current_roles))
    transition = grant_transition(
        request.project_grant, request.had_project_grant, bool(role_ids)
    )
    operations: list[Operation] = []

    if transition in (GrantTransition.CREATE, GrantTransition.REPLACE):
        operations.append(
            CreateAndAssignGrant(
                target=GrantTarget.PROJECT_GRANT,
                collections=request.project_grant,
                replaces_existing=transition is GrantTransition.REPLACE,
            )
        )
    elif transition is GrantTransition.DELETE:
        return [DeleteAssignment(target=GrantTarget.PROJECT_GRANT)]

    if transition is GrantTransition.DETACH:
        operations.append(SaveProjectRoles(role_ids=role_ids, preserve_grant=False))
    elif role_diff:
        operations.append(SaveProjectRoles(role_ids=role_ids, preserve_grant=True))
    return operations


def reconcile(request: ReconciliationInput) -> list[Operation]:
    """Compute the ordered operations for one save.

    Tenant scope touches only the global assignment, project scope only the
    project assignment; the global grant is read-only under a project.
    """
    role_diff = diff_roles(request.original_roles, request.current_roles)
    if request.scope is Scope.TENANT:
        operations = _plan_tenant(request, role_diff)
    else:
        operations = _plan_project(request, role_diff)
    return sorted(operations, key=lambda op: op.stage)
