"""Resolved capability flags for one user."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from orgperms.domain.value_objects.permission_key import INHERITED_FROM_ORG_FIELD, PermissionKey
from orgperms.domain.value_objects.permission_scope import PermissionSource


@dataclass(frozen=True)
class EffectivePermissions:
    """Complete flag map after merging defaults, organization and override."""

    flags: Mapping[PermissionKey, bool]
    inherited_from_org: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def allows(self, key: PermissionKey | str) -> bool:
        """Return the flag value; unknown keys are never granted."""
        return self.flags.get(key, False)

    def to_dict(self) -> dict[str, bool]:
        data = {str(k): v for k, v in self.flags.items()}
        data[INHERITED_FROM_ORG_FIELD] = self.inherited_from_org
        return data


@dataclass(frozen=True)
class EffectiveFlag:
    """Effective value of one key and the layer that supplied it."""

    key: PermissionKey
    value: bool
    source: PermissionSource = field(default=PermissionSource.DEFAULT)
