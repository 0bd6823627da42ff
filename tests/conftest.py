"""Pytest fixtures for grantsync tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from grantsync.application.editor import PermissionGrantEditor
from grantsync.domain.entities import Group, Permission, Role, UserRef
from grantsync.domain.exceptions import RemoteError


# --- Fake transport ---


@dataclass
class Call:
    """One request seen by the fake transport."""

    method: str
    path: str
    json: Any = None
    params: dict | None = None


class FakeTransport:
    """In-memory authorization API.

    Unknown GETs answer 404, unknown writes succeed with an empty body.
    """

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self._responses: dict[tuple[str, str], Any] = {}
        self._gates: dict[tuple[str, str], asyncio.Event] = {}
        self._hooks: dict[tuple[str, str], Callable[[], None]] = {}

    def respond(self, method: str, path: str, body: Any = None) -> None:
        self._responses[(method, path)] = body

    def fail(self, method: str, path: str, status_code: int, payload: Any = None) -> None:
        self._responses[(method, path)] = RemoteError(
            f"{method} {path} returned {status_code}",
            status_code=status_code,
            payload=payload,
        )

    def on_call(self, method: str, path: str, hook: Callable[[], None]) -> None:
        """Run ``hook`` when ``path`` is requested, before the response is chosen."""
        self._hooks[(method, path)] = hook

    def gate(self, method: str, path: str) -> asyncio.Event:
        """Hold requests to ``path`` until the returned event is set."""
        event = asyncio.Event()
        self._gates[(method, path)] = event
        return event

    def writes(self) -> list[Call]:
        return [c for c in self.calls if c.method != "GET"]

    def paths(self, method: str) -> list[str]:
        return [c.path for c in self.calls if c.method == method]

    async def _handle(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append(Call(method, path, json, dict(params) if params else None))
        gate = self._gates.get((method, path))
        if gate is not None:
            await gate.wait()
        key = (method, path)
        hook = self._hooks.get(key)
        if hook is not None:
            hook()
        if key not in self._responses:
            if method == "GET":
                raise RemoteError(f"GET {path} returned 404", status_code=404)
            return None
        outcome = self._responses[key]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self._handle("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._handle("POST", path, json=json, params=params)

    async def delete(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self._handle("DELETE", path, params=params)


# --- Sample data ---

GLOBAL_PATH = "/permission-assignments/WorkerPermission/5"
PROJECT_PATH = "/project-permission-assignments/WorkerPermission/5/project/11"

ALICE = UserRef(id=42, username="alice", full_name="Alice Doe")
BOB = UserRef(id=43, username="bob")
QA_GROUP = Group(id=7, name="QA")
DEV_ROLE = Role(id=1, name="Developer")
LEAD_ROLE = Role(id=2, name="Lead")
REVIEWER_ROLE = Role(id=3, name="Reviewer", description="Reviews work")


def assignment_body(
    grant_id: int | None = None,
    users: tuple[UserRef, ...] = (),
    groups: tuple[Group, ...] = (),
    roles: tuple[Role, ...] = (),
) -> dict:
    """Server-shaped assignment payload."""
    body: dict = {
        "roles": [{"id": r.id, "name": r.name, "description": r.description} for r in roles],
    }
    if grant_id is not None:
        body["grant"] = {
            "id": grant_id,
            "users": [{"id": u.id, "username": u.username, "fullName": u.full_name} for u in users],
            "groups": [{"id": g.id, "name": g.name} for g in groups],
            "negatedUsers": [],
            "negatedGroups": [],
        }
    return body


# --- Fixtures ---


@pytest.fixture
def transport() -> FakeTransport:
    """Fake API with role and group catalogs."""
    fake = FakeTransport()
    fake.respond(
        "GET",
        "/itemtypeset-permissions/roles",
        [{"id": r.id, "name": r.name} for r in (DEV_ROLE, LEAD_ROLE, REVIEWER_ROLE)],
    )
    fake.respond("GET", "/groups", [{"id": QA_GROUP.id, "name": QA_GROUP.name}])
    return fake


@pytest.fixture
def editor(transport: FakeTransport) -> PermissionGrantEditor:
    """Editor wired to the fake transport."""
    return PermissionGrantEditor.from_transport(transport)


@pytest.fixture
def workers() -> Permission:
    """Workers permission without any assignment."""
    return Permission(id=5, name="Workers")
