"""Roles currently selected for a permission at one scope."""

from collections.abc import Iterable

from grantsync.domain.entities import Role


class RoleSelectionStore:
    """Unordered role set; insertion order is kept for display only."""

    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._roles: list[Role] = []
        self.replace(roles)

    def add_role(self, role: Role) -> None:
        if self.contains(role.id):
            return
        self._roles.append(role)

    def remove_role(self, role_id: int) -> None:
        self._roles = [role for role in self._roles if role.id != role_id]

    def contains(self, role_id: int) -> bool:
        return any(role.id == role_id for role in self._roles)

    def replace(self, roles: Iterable[Role]) -> None:
        self._roles = []
        for role in roles:
            self.add_role(role)

    def reset(self) -> None:
        self._roles = []

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(self._roles)

    @property
    def role_ids(self) -> list[int]:
        return [role.id for role in self._roles]

    def __len__(self) -> int:
        return len(self._roles)
