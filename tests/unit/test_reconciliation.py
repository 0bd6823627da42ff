"""Unit tests for the reconciliation engine."""

import pytest

from grantsync.domain.entities import Group, Role, UserRef
from grantsync.domain.services import (
    AssignRole,
    CreateAndAssignGrant,
    DeleteAssignment,
    GrantTransition,
    ReconciliationInput,
    RemoveRole,
    SaveProjectRoles,
    SaveStage,
    UpdateAssignment,
    diff_roles,
    grant_transition,
    reconcile,
)
from grantsync.domain.value_objects import GrantCollections, GrantTarget, Scope

DEV = Role(id=1, name="Developer")
LEAD = Role(id=2, name="Lead")
REVIEWER = Role(id=3, name="Reviewer")
ALICE_GRANT = GrantCollections(users=(UserRef(id=42, username="alice"),))
QA_GRANT = GrantCollections(groups=(Group(id=7, name="QA"),))


def test_diff_roles_is_minimal() -> None:
    """Only roles that differ by id are added or removed."""
    diff = diff_roles([DEV, LEAD], [LEAD, REVIEWER])

    assert diff.to_remove == (1,)
    assert diff.to_add == (3,)


def test_diff_roles_compares_by_id() -> None:
    """Renamed copies of the same role are not a change."""
    diff = diff_roles([DEV, LEAD], [Role(id=2, name="Lead v2"), Role(id=1, name="Dev")])

    assert not diff


@pytest.mark.parametrize(
    ("current", "had_original", "has_roles", "expected"),
    [
        (ALICE_GRANT, False, False, GrantTransition.CREATE),
        (ALICE_GRANT, True, True, GrantTransition.REPLACE),
        (GrantCollections(), False, True, GrantTransition.NONE),
        (GrantCollections(), True, True, GrantTransition.DETACH),
        (GrantCollections(), True, False, GrantTransition.DELETE),
    ],
)
def test_grant_transition(
    current: GrantCollections, had_original: bool, has_roles: bool, expected: GrantTransition
) -> None:
    """Grant state changes are classified from emptiness and the baseline."""
    assert grant_transition(current, had_original, has_roles) is expected


def test_no_changes_produce_no_operations() -> None:
    """An unchanged permission without a grant needs no writes."""
    request = ReconciliationInput(scope=Scope.TENANT, original_roles=[DEV], current_roles=[DEV])

    assert reconcile(request) == []


def test_tenant_create_grant_then_roles() -> None:
    """A new global grant is written before role changes."""
    request = ReconciliationInput(
        scope=Scope.TENANT,
        original_roles=[DEV],
        current_roles=[LEAD],
        grant=ALICE_GRANT,
    )

    assert reconcile(request) == [
        CreateAndAssignGrant(target=GrantTarget.GRANT, collections=ALICE_GRANT),
        RemoveRole(1),
        AssignRole(2),
    ]


def test_tenant_existing_grant_is_replaced() -> None:
    """A non-empty grant over an existing one is recreated."""
    request = ReconciliationInput(
        scope=Scope.TENANT,
        original_roles=[],
        current_roles=[],
        grant=QA_GRANT,
        had_grant=True,
    )

    assert reconcile(request) == [
        CreateAndAssignGrant(target=GrantTarget.GRANT, collections=QA_GRANT, replaces_existing=True)
    ]


def test_tenant_emptied_grant_with_roles_keeps_roles() -> None:
    """Clearing the grant while roles remain detaches the grant only."""
    request = ReconciliationInput(
        scope=Scope.TENANT,
        original_roles=[DEV, LEAD],
        current_roles=[DEV, LEAD],
        had_grant=True,
    )

    assert reconcile(request) == [UpdateAssignment(role_ids=(1, 2), grant_id=None)]


def test_tenant_removing_everything_deletes_assignment() -> None:
    """Empty grant and no roles deletes the assignment and nothing else."""
    request = ReconciliationInput(
        scope=Scope.TENANT,
        original_roles=[DEV],
        current_roles=[],
        had_grant=True,
    )

    assert reconcile(request) == [DeleteAssignment(target=GrantTarget.GRANT)]


def test_tenant_roles_only_change() -> None:
    """Role changes without a grant emit one call per changed role."""
    request = ReconciliationInput(
        scope=Scope.TENANT,
        original_roles=[DEV, LEAD],
        current_roles=[LEAD, REVIEWER],
    )

    assert reconcile(request) == [RemoveRole(1), AssignRole(3)]


def test_project_scope_never_touches_global_grant() -> None:
    """The global grant is ignored when saving under a project."""
    request = ReconciliationInput(
        scope=Scope.PROJECT,
        original_roles=[],
        current_roles=[],
        grant=ALICE_GRANT,
        had_grant=False,
    )

    assert reconcile(request) == []


def test_project_roles_only_change_preserves_grant() -> None:
    """A project role change re-reads and carries the persisted grant."""
    request = ReconciliationInput(
        scope=Scope.PROJECT,
        original_roles=[DEV],
        current_roles=[DEV, LEAD],
    )

    assert reconcile(request) == [SaveProjectRoles(role_ids=(1, 2), preserve_grant=True)]


def test_project_grant_and_roles_ordered_by_stage() -> None:
    """Project grant is written before project roles."""
    request = ReconciliationInput(
        scope=Scope.PROJECT,
        original_roles=[],
        current_roles=[REVIEWER],
        project_grant=QA_GRANT,
    )

    operations = reconcile(request)

    assert operations == [
        CreateAndAssignGrant(target=GrantTarget.PROJECT_GRANT, collections=QA_GRANT),
        SaveProjectRoles(role_ids=(3,), preserve_grant=True),
    ]
    assert [op.stage for op in operations] == [SaveStage.PROJECT_GRANT, SaveStage.PROJECT_ROLES]


def test_project_emptied_grant_with_roles_detaches() -> None:
    """Clearing the project grant keeps roles without a grant."""
    request = ReconciliationInput(
        scope=Scope.PROJECT,
        original_roles=[DEV],
        current_roles=[DEV],
        had_project_grant=True,
    )

    assert reconcile(request) == [SaveProjectRoles(role_ids=(1,), preserve_grant=False)]


def test_project_removing_everything_deletes_assignment() -> None:
    """Empty project grant and no roles deletes only the project assignment."""
    request = ReconciliationInput(
        scope=Scope.PROJECT,
        original_roles=[DEV],
        current_roles=[],
        had_project_grant=True,
    )

    assert reconcile(request) == [DeleteAssignment(target=GrantTarget.PROJECT_GRANT)]


def test_stage_labels() -> None:
    """Stages carry the labels used in error messages."""
    assert SaveStage.GLOBAL_GRANT.label == "global grant"
    assert SaveStage.PROJECT_ROLES.label == "project role sync"
    assert sorted(SaveStage) == [
        SaveStage.GLOBAL_GRANT,
        SaveStage.PROJECT_GRANT,
        SaveStage.PROJECT_ROLES,
        SaveStage.GLOBAL_ROLES,
    ]
