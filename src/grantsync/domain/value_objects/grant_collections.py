"""Grant membership lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grantsync.domain.entities.group import Group
    from grantsync.domain.entities.user import UserRef


class GrantCollectionKey(StrEnum):
    """The four membership lists of a grant."""

    USERS = "users"
    GROUPS = "groups"
    NEGATED_USERS = "negated_users"
    NEGATED_GROUPS = "negated_groups"

    @property
    def holds_users(self) -> bool:
        return self in (GrantCollectionKey.USERS, GrantCollectionKey.NEGATED_USERS)


@dataclass(frozen=True)
class GrantCollections:
    """Allowed and denied users/groups of one grant. Ids are unique per list."""

    users: tuple[UserRef, ...] = field(default_factory=tuple)
    groups: tuple[Group, ...] = field(default_factory=tuple)
    negated_users: tuple[UserRef, ...] = field(default_factory=tuple)
    negated_groups: tuple[Group, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for key in GrantCollectionKey:
            ids = self.ids(key)
            if len(ids) != len(set(ids)):
                raise ValueError(f"Duplicate ids in grant list '{key}'")

    def get(self, key: GrantCollectionKey) -> tuple[UserRef | Group, ...]:
        return getattr(self, key.value)

    def ids(self, key: GrantCollectionKey) -> list[int]:
        return [entity.id for entity in self.get(key)]

    @property
    def is_empty(self) -> bool:
        return not any(self.get(key) for key in GrantCollectionKey)
