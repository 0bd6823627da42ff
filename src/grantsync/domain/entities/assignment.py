"""Persisted permission assignment (global or project scoped)."""

from dataclasses import dataclass, field

from grantsync.domain.entities.role import Role
from grantsync.domain.value_objects import GrantCollections


@dataclass(frozen=True)
class GrantDetails:
    """Grant referenced by an assignment, with its membership."""

    id: int | None
    collections: GrantCollections
    name: str | None = None


@dataclass(frozen=True)
class PermissionAssignment:
    """Association of a permission (at one scope) to a grant and roles."""

    grant: GrantDetails | None = None
    roles: tuple[Role, ...] = field(default_factory=tuple)
    project_id: int | None = None

    @property
    def grant_id(self) -> int | None:
        return self.grant.id if self.grant else None

    @property
    def grant_collections(self) -> GrantCollections:
        return self.grant.collections if self.grant else GrantCollections()
