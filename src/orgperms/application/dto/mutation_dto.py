"""Mutation result DTO."""

from dataclasses import dataclass, field

from orgperms.domain.entities import PermissionLog, PermissionSet
from orgperms.domain.value_objects import PermissionChange, PermissionScope


@dataclass
class MutationResult:
    """Outcome of one permission mutation."""

    scope: PermissionScope
    target_id: str
    log: PermissionLog
    changes: list[PermissionChange] = field(default_factory=list)
    permissions: PermissionSet | None = None
    affected_users: int = 0
