"""Effective permissions output DTO."""

from dataclasses import dataclass

from orgperms.domain.entities import Organization, User
from orgperms.domain.value_objects import EffectiveFlag, EffectivePermissions


@dataclass
class EffectivePermissionsOutput:
    """Resolved permissions of a user with per-key sources."""

    user: User
    organization: Organization | None
    effective: EffectivePermissions
    flags: list[EffectiveFlag]
