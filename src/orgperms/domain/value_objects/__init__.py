"""Domain value objects."""

from orgperms.domain.value_objects.effective_permissions import (
    EffectiveFlag,
    EffectivePermissions,
)
from orgperms.domain.value_objects.log_cursor import LogCursor
from orgperms.domain.value_objects.permission_change import PermissionChange
from orgperms.domain.value_objects.permission_key import (
    ALL_PERMISSIONS,
    INHERITED_FROM_ORG_FIELD,
    LAST_UPDATED_FIELD,
    PermissionKey,
)
from orgperms.domain.value_objects.permission_scope import (
    LogAction,
    PermissionScope,
    PermissionSource,
)

__all__ = [
    "ALL_PERMISSIONS",
    "EffectiveFlag",
    "EffectivePermissions",
    "INHERITED_FROM_ORG_FIELD",
    "LAST_UPDATED_FIELD",
    "LogAction",
    "LogCursor",
    "PermissionChange",
    "PermissionKey",
    "PermissionScope",
    "PermissionSource",
]
