"""Repository ports."""

from orgperms.application.ports.repositories.organization_repository import (
    OrganizationRepository,
)
from orgperms.application.ports.repositories.permission_log_repository import (
    PermissionLogRepository,
)
from orgperms.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "OrganizationRepository",
    "PermissionLogRepository",
    "UserRepository",
]
