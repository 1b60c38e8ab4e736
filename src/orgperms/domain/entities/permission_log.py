"""Permission log entity - immutable record of one mutation."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from orgperms.domain.value_objects import LogAction, PermissionChange, PermissionScope


@dataclass(frozen=True)
class PermissionLog:
    """Append-only change record. ``keys`` indexes the changed keys for filtering."""

    id: UUID
    org_id: str
    scope: PermissionScope
    action: LogAction
    actor_id: str
    created_at: datetime
    changed: list[PermissionChange] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)
    org_name: str | None = None
    user_id: str | None = None
    user_email: str | None = None
    actor_email: str | None = None
    notes: str | None = None
