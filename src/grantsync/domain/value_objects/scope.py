"""Assignment scopes and grant targets."""

from enum import StrEnum


class Scope(StrEnum):
    """Context a permission is viewed and edited under."""

    TENANT = "tenant"
    PROJECT = "project"


class GrantTarget(StrEnum):
    """Which grant store an edit applies to."""

    GRANT = "grant"
    PROJECT_GRANT = "projectGrant"
