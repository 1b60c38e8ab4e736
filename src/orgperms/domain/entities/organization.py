"""Organization entity."""

from dataclasses import dataclass
from datetime import datetime

from orgperms.domain.entities.permission_set import PermissionSet


@dataclass
class Organization:
    """Organization - owns the default permission set for its members."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    permissions: PermissionSet | None = None
