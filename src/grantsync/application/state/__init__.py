"""In-memory editing state for one permission."""

from grantsync.application.state.grant_collection_store import GrantCollectionStore
from grantsync.application.state.permission_grant_state import (
    Baseline,
    PermissionGrantMetadata,
    PermissionGrantState,
)
from grantsync.application.state.role_selection_store import RoleSelectionStore
from grantsync.application.state.scope_composition import ScopeComposition

__all__ = [
    "Baseline",
    "GrantCollectionStore",
    "PermissionGrantMetadata",
    "PermissionGrantState",
    "RoleSelectionStore",
    "ScopeComposition",
]
