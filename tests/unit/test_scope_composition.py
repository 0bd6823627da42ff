"""Unit tests for ScopeComposition."""

from grantsync.application.state import ScopeComposition
from grantsync.domain.entities import Permission
from grantsync.domain.value_objects import GrantTarget, Scope


def test_tenant_scope_edits_global_only() -> None:
    """Tenant scope: global grant and roles are active, project grant is not."""
    composition = ScopeComposition.for_permission(Permission(id=5, name="Workers"), Scope.TENANT)

    assert composition.is_editable(GrantTarget.GRANT)
    assert not composition.is_editable(GrantTarget.PROJECT_GRANT)
    assert composition.loads_global_roles
    assert not composition.global_grant_read_only


def test_project_scope_edits_project_grant() -> None:
    """Project scope with a project id edits the project grant only."""
    composition = ScopeComposition.for_permission(
        Permission(id=5, name="Workers", grant_id=7), Scope.PROJECT, project_id=11
    )

    assert composition.project_active
    assert composition.is_editable(GrantTarget.PROJECT_GRANT)
    assert not composition.is_editable(GrantTarget.GRANT)
    assert composition.global_grant_read_only
    assert composition.loads_global_grant
    assert not composition.loads_global_roles


def test_project_scope_skips_global_grant_without_reference() -> None:
    """The read-only global grant is only loaded when the permission has one."""
    composition = ScopeComposition.for_permission(
        Permission(id=5, name="Workers"), Scope.PROJECT, project_id=11
    )

    assert not composition.loads_global_grant


def test_project_scope_without_project_id_is_inert() -> None:
    """Without a project id nothing grant-related is editable."""
    composition = ScopeComposition.for_permission(Permission(id=5, name="Workers"), Scope.PROJECT)

    assert not composition.project_active
    assert not composition.is_editable(GrantTarget.PROJECT_GRANT)
    assert not composition.is_editable(GrantTarget.GRANT)


def test_no_permission_has_no_global_grant() -> None:
    """A missing permission never loads a global grant."""
    composition = ScopeComposition.for_permission(None, Scope.TENANT)

    assert not composition.loads_global_grant
