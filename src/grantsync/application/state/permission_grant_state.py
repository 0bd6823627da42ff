"""Editing state of one permission: stores, baseline, loading and error slots."""

from dataclasses import dataclass, field

from grantsync.application.state.grant_collection_store import GrantCollectionStore
from grantsync.application.state.role_selection_store import RoleSelectionStore
from grantsync.application.state.scope_composition import ScopeComposition
from grantsync.domain.entities import Group, Permission, Role, UserRef
from grantsync.domain.exceptions import ReadOnlyScopeError
from grantsync.domain.value_objects import GrantCollectionKey, GrantTarget, Scope


@dataclass
class Baseline:
    """Last persisted state, used as the "original" side of a diff."""

    original_roles: tuple[Role, ...] = field(default_factory=tuple)
    had_grant: bool = False
    had_project_grant: bool = False


@dataclass(frozen=True)
class PermissionGrantMetadata:
    """Summary flags for display."""

    has_grant_direct: bool
    has_project_grant_direct: bool
    has_role_template: bool


class PermissionGrantState:
    """Grant and role stores for the selected permission.

    One instance per editing session; nothing is shared across permissions.
    """

    def __init__(self) -> None:
        self.loading = False
        self.error: str | None = None
        self.permission: Permission | None = None
        self.composition = ScopeComposition(scope=Scope.TENANT)
        self.item_type_set_id: int | None = None
        self.available_roles: list[Role] = []
        self.available_groups: list[Group] = []
        self.selected_roles = RoleSelectionStore()
        self.grant = GrantCollectionStore()
        self.project_grant = GrantCollectionStore()
        self.baseline = Baseline()

    def store_for(self, target: GrantTarget) -> GrantCollectionStore:
        if target is GrantTarget.GRANT:
            return self.grant
        return self.project_grant

    def add_entity(
        self, target: GrantTarget, key: GrantCollectionKey, value: UserRef | Group
    ) -> None:
        self._check_editable(target)
        self.store_for(target).add_entity(key, value)

    def remove_entity(self, target: GrantTarget, key: GrantCollectionKey, entity_id: int) -> None:
        self._check_editable(target)
        self.store_for(target).remove_entity(key, entity_id)

    def add_role(self, role: Role) -> None:
        self.selected_roles.add_role(role)

    def remove_role(self, role_id: int) -> None:
        self.selected_roles.remove_role(role_id)

    def _check_editable(self, target: GrantTarget) -> None:
        if not self.composition.is_editable(target):
            raise ReadOnlyScopeError(
                f"Grant '{target}' is read-only in {self.composition.scope} scope"
            )

    def reset(self) -> None:
        """Clear every per-permission collection in one step."""
        self.selected_roles.reset()
        self.available_roles = []
        self.grant.reset()
        self.project_grant.reset()
        self.baseline = Baseline()

    def commit_baseline(self) -> None:
        """Adopt the current edits as the persisted state after a successful save."""
        self.baseline = Baseline(
            original_roles=self.selected_roles.roles,
            had_grant=self.baseline.had_grant
            if self.composition.is_project
            else not self.grant.is_empty,
            had_project_grant=not self.project_grant.is_empty
            if self.composition.is_project
            else self.baseline.had_project_grant,
        )

    @property
    def metadata(self) -> PermissionGrantMetadata:
        return PermissionGrantMetadata(
            has_grant_direct=not self.grant.is_empty or self.baseline.had_grant,
            has_project_grant_direct=not self.project_grant.is_empty
            or self.baseline.had_project_grant,
            has_role_template=len(self.selected_roles) > 0
            or bool(self.baseline.original_roles),
        )
