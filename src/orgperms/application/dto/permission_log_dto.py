"""Permission log DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from orgperms.domain.entities import PermissionLog
from orgperms.domain.value_objects import LogAction, PermissionChange, PermissionScope


@dataclass
class PermissionLogInput:
    """Log entry as formed by a mutation; the writer adds id, timestamp and key index."""

    org_id: str
    scope: PermissionScope
    action: LogAction
    actor_id: str
    changed: list[PermissionChange]
    org_name: str | None = None
    user_id: str | None = None
    user_email: str | None = None
    actor_email: str | None = None
    notes: str | None = None


@dataclass
class LogFilters:
    """Optional, independently combinable log filters."""

    org_id: str | None = None
    user_id: str | None = None
    actor_id: str | None = None
    actor_email: str | None = None
    key: str | None = None
    scope: PermissionScope | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None

    def matches(self, log: PermissionLog) -> bool:
        """In-process equivalent of the store query, used by non-SQL stores."""
        if self.org_id is not None and log.org_id != self.org_id:
            return False
        if self.user_id is not None and log.user_id != self.user_id:
            return False
        if self.actor_id is not None and log.actor_id != self.actor_id:
            return False
        if self.actor_email is not None and log.actor_email != self.actor_email:
            return False
        if self.key is not None and self.key not in log.keys:
            return False
        if self.scope is not None and log.scope != self.scope:
            return False
        if self.created_from is not None and log.created_at < self.created_from:
            return False
        if self.created_to is not None and log.created_at > self.created_to:
            return False
        return True


@dataclass
class PermissionLogPage:
    """One page of log entries, newest first."""

    entries: list[PermissionLog] = field(default_factory=list)
    next_cursor: str | None = None
