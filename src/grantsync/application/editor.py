"""Editing session for the grants and roles of one permission."""

import asyncio
import logging

from grantsync.application.ports import Transport
from grantsync.application.state import PermissionGrantMetadata, PermissionGrantState
from grantsync.application.use_cases.hydration.load_permission_grants import (
    LoadPermissionGrantsUseCase,
    LoadRequest,
    LoadToken,
)
from grantsync.application.use_cases.persistence.persist_assignments import (
    PersistAssignmentsUseCase,
)
from grantsync.domain.entities import Group, Permission, Role, UserRef
from grantsync.domain.value_objects import GrantCollectionKey, GrantTarget, Scope

logger = logging.getLogger(__name__)


class PermissionGrantEditor:
    """Facade used by every editing surface.

    Owns one ``PermissionGrantState``. Selecting another permission cancels
    any load still in flight for the previous one. Saves cannot be cancelled:
    a selection made during a save starts loading once the save has finished.
    """

    def __init__(
        self,
        load_grants: LoadPermissionGrantsUseCase,
        persist_assignments: PersistAssignmentsUseCase,
    ) -> None:
        self._load = load_grants
        self._persist = persist_assignments
        self._token: LoadToken | None = None
        self._save_lock = asyncio.Lock()
        self.state = PermissionGrantState()

    @classmethod
    def from_transport(cls, transport: Transport) -> "PermissionGrantEditor":
        return cls(
            load_grants=LoadPermissionGrantsUseCase(transport),
            persist_assignments=PersistAssignmentsUseCase(transport),
        )

    async def select(
        self,
        permission: Permission | None,
        scope: Scope = Scope.TENANT,
        project_id: int | None = None,
        item_type_set_id: int | None = None,
    ) -> None:
        """Switch to ``permission`` at ``scope`` and hydrate the stores."""
        logger.debug(
            "Selecting permission %s at %s scope (project %s)",
            permission.name if permission else None,
            scope,
            project_id,
        )
        if self._token is not None:
            self._token.cancel()
        token = LoadToken()
        self._token = token
        # Wait for a running save.
        async with self._save_lock:
            pass
        if token.cancelled:
            return
        request = LoadRequest(
            permission=permission,
            scope=scope,
            project_id=project_id,
            item_type_set_id=item_type_set_id,
        )
        await self._load.execute(self.state, request, token)

    async def reload(self) -> None:
        """Re-fetch the current selection from the server."""
        composition = self.state.composition
        await self.select(
            self.state.permission,
            composition.scope,
            composition.project_id,
            self.state.item_type_set_id,
        )

    def add_role(self, role: Role) -> None:
        self.state.add_role(role)

    def remove_role(self, role_id: int) -> None:
        self.state.remove_role(role_id)

    def add_entity(
        self, target: GrantTarget, key: GrantCollectionKey, value: UserRef | Group
    ) -> None:
        self.state.add_entity(target, key, value)

    def remove_entity(self, target: GrantTarget, key: GrantCollectionKey, entity_id: int) -> None:
        self.state.remove_entity(target, key, entity_id)

    async def persist(self) -> bool:
        """Save all pending changes; on failure ``state.error`` holds the reason."""
        if self._save_lock.locked():
            logger.warning("Save refused: another save is in progress")
            return False
        async with self._save_lock:
            return await self._persist.execute(self.state)

    def reset_error(self) -> None:
        self.state.error = None

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def metadata(self) -> PermissionGrantMetadata:
        return self.state.metadata
