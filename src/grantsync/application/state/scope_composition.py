"""Which stores are loaded and editable for a given scope."""

from dataclasses import dataclass

from grantsync.domain.entities import Permission
from grantsync.domain.value_objects import GrantTarget, Scope


@dataclass(frozen=True)
class ScopeComposition:
    """Derived view of the active scope.

    Tenant scope edits the global grant and global roles. Project scope edits
    the project grant and project roles and shows the global grant read-only
    when the permission already references one.
    """

    scope: Scope
    project_id: int | None = None
    has_global_grant: bool = False

    @classmethod
    def for_permission(
        cls,
        permission: Permission | None,
        scope: Scope,
        project_id: int | None = None,
    ) -> "ScopeComposition":
        return cls(
            scope=scope,
            project_id=project_id,
            has_global_grant=bool(permission and permission.has_global_grant),
        )

    @property
    def is_project(self) -> bool:
        return self.scope is Scope.PROJECT

    @property
    def project_active(self) -> bool:
        return self.is_project and self.project_id is not None

    @property
    def loads_global_grant(self) -> bool:
        return self.has_global_grant

    @property
    def loads_global_roles(self) -> bool:
        return self.scope is Scope.TENANT

    @property
    def global_grant_read_only(self) -> bool:
        return self.is_project

    def is_editable(self, target: GrantTarget) -> bool:
        if target is GrantTarget.GRANT:
            return not self.global_grant_read_only
        return self.project_active
