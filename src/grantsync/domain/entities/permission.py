"""Permission entity - protected action being authorized."""

from dataclasses import dataclass, field

from grantsync.domain.entities.role import Role
from grantsync.domain.value_objects.permission_type import resolve_permission_type


@dataclass(frozen=True)
class Permission:
    """Permission as listed by the external catalog.

    ``grant_id`` references the global grant, ``project_grant_id`` /
    ``has_project_grant`` flag an existing project grant. ``assigned_roles``
    are the global roles known at listing time.
    """

    id: int | str | None
    name: str
    permission_type: str | None = None
    grant_id: int | None = None
    grant_name: str | None = None
    project_grant_id: int | None = None
    has_project_grant: bool = False
    assigned_roles: tuple[Role, ...] = field(default_factory=tuple)

    @property
    def has_valid_id(self) -> bool:
        return isinstance(self.id, int) and not isinstance(self.id, bool) and self.id > 0

    @property
    def wire_type(self) -> str | None:
        """Explicit wire type, else the one derived from the display name."""
        return self.permission_type or resolve_permission_type(self.name)

    @property
    def has_global_grant(self) -> bool:
        return self.grant_id is not None

    @property
    def has_initial_project_grant(self) -> bool:
        return self.project_grant_id is not None or self.has_project_grant
