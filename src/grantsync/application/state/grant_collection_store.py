"""Mutable store for the four membership lists of one grant."""

from grantsync.domain.entities import Group, UserRef
from grantsync.domain.exceptions import ValidationError
from grantsync.domain.value_objects import GrantCollectionKey, GrantCollections


class GrantCollectionStore:
    """Set-semantics lists keyed by ``GrantCollectionKey``; insertion order kept."""

    def __init__(self, collections: GrantCollections | None = None) -> None:
        self._lists: dict[GrantCollectionKey, list[UserRef | Group]] = {}
        self.replace(collections or GrantCollections())

    def add_entity(self, key: GrantCollectionKey, value: UserRef | Group) -> None:
        """Append ``value`` unless an entity with the same id is already listed."""
        if isinstance(value, UserRef) != key.holds_users:
            raise ValidationError(f"Cannot add {type(value).__name__} to grant list '{key}'")
        collection = self._lists[key]
        if any(item.id == value.id for item in collection):
            return
        collection.append(value)

    def remove_entity(self, key: GrantCollectionKey, entity_id: int) -> None:
        """Drop the entity with ``entity_id``; absent ids are ignored."""
        self._lists[key] = [item for item in self._lists[key] if item.id != entity_id]

    def get(self, key: GrantCollectionKey) -> tuple[UserRef | Group, ...]:
        return tuple(self._lists[key])

    def snapshot(self) -> GrantCollections:
        return GrantCollections(
            users=tuple(self._lists[GrantCollectionKey.USERS]),
            groups=tuple(self._lists[GrantCollectionKey.GROUPS]),
            negated_users=tuple(self._lists[GrantCollectionKey.NEGATED_USERS]),
            negated_groups=tuple(self._lists[GrantCollectionKey.NEGATED_GROUPS]),
        )

    def replace(self, collections: GrantCollections) -> None:
        self._lists = {key: list(collections.get(key)) for key in GrantCollectionKey}

    def reset(self) -> None:
        self.replace(GrantCollections())

    @property
    def is_empty(self) -> bool:
        return not any(self._lists.values())
