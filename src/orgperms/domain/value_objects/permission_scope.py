"""Scope and action labels for permission mutations."""

from enum import StrEnum


class PermissionScope(StrEnum):
    """What a mutation or log entry targets."""

    ORGANIZATION = "organization"
    USER = "user"


class LogAction(StrEnum):
    """Kind of mutation recorded in the permission log."""

    SET = "set"
    UPDATE = "update"
    RESET = "reset"


class PermissionSource(StrEnum):
    """Where an effective flag value came from."""

    USER_OVERRIDE = "user_override"
    ORGANIZATION = "organization"
    DEFAULT = "default"
