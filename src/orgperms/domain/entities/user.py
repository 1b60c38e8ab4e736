"""User entity."""

from dataclasses import dataclass
from datetime import datetime

from orgperms.domain.entities.permission_set import PermissionSet


@dataclass
class User:
    """User - member of one organization, optional permission override."""

    id: str
    email: str
    name: str
    organization_id: str
    role: str
    created_at: datetime
    updated_at: datetime
    permissions: PermissionSet | None = None

    @property
    def has_override(self) -> bool:
        return self.permissions is not None and self.permissions.inherited_from_org is False
