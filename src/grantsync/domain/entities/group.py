"""Group entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """Group of users that can be allowed or denied by a grant."""

    id: int
    name: str
