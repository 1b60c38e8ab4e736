"""Pure permission logic: schema, resolution and diffing."""

from orgperms.domain.services.diff import diff_permissions
from orgperms.domain.services.resolver import explain, resolve
from orgperms.domain.services.schema import DEFAULT_SCHEMA, PermissionSchema
from orgperms.domain.services.service_map import Services, permissions_for_services

__all__ = [
    "DEFAULT_SCHEMA",
    "PermissionSchema",
    "Services",
    "diff_permissions",
    "explain",
    "permissions_for_services",
    "resolve",
]
