"""Wire models for the authorization API and their decoders.

Each decoder validates one endpoint's response and returns domain
entities; malformed payloads raise ``MalformedResponseError``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from grantsync.domain.entities import GrantDetails, Group, PermissionAssignment, Role, UserRef
from grantsync.domain.exceptions import MalformedResponseError
from grantsync.domain.value_objects import GrantCollections


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class UserPayload(_WireModel):
    id: int
    username: str | None = None
    full_name: str | None = None

    def to_entity(self) -> UserRef:
        username = self.username or ""
        return UserRef(id=self.id, username=username, full_name=self.full_name or username or None)


class GroupPayload(_WireModel):
    id: int
    name: str = ""

    def to_entity(self) -> Group:
        return Group(id=self.id, name=self.name)


class RolePayload(_WireModel):
    id: int
    name: str = ""
    description: str | None = None

    def to_entity(self) -> Role:
        return Role(id=self.id, name=self.name, description=self.description)


def _unique(entities: list) -> tuple:
    seen: set[int] = set()
    result = []
    for entity in entities:
        if entity.id not in seen:
            seen.add(entity.id)
            result.append(entity)
    return tuple(result)


class GrantPayload(_WireModel):
    id: int | None = None
    name: str | None = None
    users: list[UserPayload] = Field(default_factory=list)
    groups: list[GroupPayload] = Field(default_factory=list)
    negated_users: list[UserPayload] = Field(default_factory=list)
    negated_groups: list[GroupPayload] = Field(default_factory=list)

    def to_collections(self) -> GrantCollections:
        return GrantCollections(
            users=_unique([u.to_entity() for u in self.users]),
            groups=_unique([g.to_entity() for g in self.groups]),
            negated_users=_unique([u.to_entity() for u in self.negated_users]),
            negated_groups=_unique([g.to_entity() for g in self.negated_groups]),
        )

    def to_entity(self) -> GrantDetails:
        return GrantDetails(id=self.id, name=self.name, collections=self.to_collections())


class AssignmentPayload(_WireModel):
    grant: GrantPayload | None = None
    roles: list[RolePayload] = Field(default_factory=list)
    project_id: int | None = None

    def to_entity(self) -> PermissionAssignment:
        return PermissionAssignment(
            grant=self.grant.to_entity() if self.grant else None,
            roles=_unique([r.to_entity() for r in self.roles]),
            project_id=self.project_id,
        )


_roles_adapter = TypeAdapter(list[RolePayload])
_groups_adapter = TypeAdapter(list[GroupPayload])


def decode_assignment(data: Any) -> PermissionAssignment:
    """Decode GET /permission-assignments and /project-permission-assignments responses."""
    if data is None:
        return PermissionAssignment()
    try:
        return AssignmentPayload.model_validate(data).to_entity()
    except PydanticValidationError as e:
        raise MalformedResponseError(f"Invalid assignment payload: {e}") from e


def decode_roles(data: Any) -> list[Role]:
    """Decode GET /itemtypeset-permissions/roles."""
    if data is None:
        return []
    try:
        return [r.to_entity() for r in _roles_adapter.validate_python(data)]
    except PydanticValidationError as e:
        raise MalformedResponseError(f"Invalid roles payload: {e}") from e


def decode_groups(data: Any) -> list[Group]:
    """Decode GET /groups."""
    if data is None:
        return []
    try:
        return [g.to_entity() for g in _groups_adapter.validate_python(data)]
    except PydanticValidationError as e:
        raise MalformedResponseError(f"Invalid groups payload: {e}") from e
