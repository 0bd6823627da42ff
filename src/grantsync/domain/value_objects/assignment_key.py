"""Identity of a permission assignment on the wire."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AssignmentKey:
    """Permission identity plus, for project scope, the project coordinates."""

    permission_type: str
    permission_id: int
    project_id: int | None = None
    item_type_set_id: int | None = None
