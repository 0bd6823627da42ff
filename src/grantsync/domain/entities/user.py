"""User reference."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRef:
    """User referenced by a grant."""

    id: int
    username: str
    full_name: str | None = None
