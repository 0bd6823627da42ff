"""Role entity - reusable access template."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Role:
    """Role template assignable to a permission. Referenced, never mutated here."""

    id: int
    name: str
    description: str | None = None
