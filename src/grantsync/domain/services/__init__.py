"""Domain services."""

from grantsync.domain.services.reconciliation import (
    AssignRole,
    CreateAndAssignGrant,
    DeleteAssignment,
    GrantTransition,
    Operation,
    ReconciliationInput,
    RemoveRole,
    RoleDiff,
    SaveProjectRoles,
    SaveStage,
    UpdateAssignment,
    diff_roles,
    grant_transition,
    reconcile,
)

__all__ = [
    "AssignRole",
    "CreateAndAssignGrant",
    "DeleteAssignment",
    "GrantTransition",
    "Operation",
    "ReconciliationInput",
    "RemoveRole",
    "RoleDiff",
    "SaveProjectRoles",
    "SaveStage",
    "UpdateAssignment",
    "diff_roles",
    "grant_transition",
    "reconcile",
]
