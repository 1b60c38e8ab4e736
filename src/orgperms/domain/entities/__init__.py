"""Domain entities."""

from orgperms.domain.entities.organization import Organization
from orgperms.domain.entities.permission_log import PermissionLog
from orgperms.domain.entities.permission_set import PermissionSet
from orgperms.domain.entities.user import User

__all__ = [
    "Organization",
    "PermissionLog",
    "PermissionSet",
    "User",
]
