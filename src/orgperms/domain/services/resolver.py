"""Effective permission resolution.

Merge order: schema default, then either the user's override (when the
user opted out of inheritance) or the organization's stored set. Keys
missing from an active override fall back to the schema default, not to
the organization.
"""

from orgperms.domain.entities import Organization, PermissionSet, User
from orgperms.domain.services.schema import DEFAULT_SCHEMA, PermissionSchema
from orgperms.domain.value_objects import (
    EffectiveFlag,
    EffectivePermissions,
    PermissionKey,
    PermissionSource,
)


def _stored_flags(
    permissions: PermissionSet | None, schema: PermissionSchema
) -> dict[PermissionKey, bool]:
    if permissions is None:
        return {}
    return {
        k: v for k, v in permissions.flags.items() if k in schema.defaults and isinstance(v, bool)
    }


def _override(user: User | None) -> PermissionSet | None:
    if user is None or user.permissions is None:
        return None
    if user.permissions.inherited_from_org is False:
        return user.permissions
    return None


def resolve(
    user: User | None,
    organization: Organization | None,
    schema: PermissionSchema = DEFAULT_SCHEMA,
) -> EffectivePermissions:
    """Return the effective permissions of ``user`` in ``organization``.

    Total: either argument may be None and the result always holds every
    schema key.
    """
    merged = dict(schema.defaults)
    override = _override(user)
    if override is not None:
        merged.update(_stored_flags(override, schema))
        return EffectivePermissions(flags=merged, inherited_from_org=False)

    org_permissions = organization.permissions if organization else None
    merged.update(_stored_flags(org_permissions, schema))
    return EffectivePermissions(flags=merged, inherited_from_org=True)


def explain(
    user: User | None,
    organization: Organization | None,
    schema: PermissionSchema = DEFAULT_SCHEMA,
) -> list[EffectiveFlag]:
    """Effective value of each key together with the layer that supplied it."""
    effective = resolve(user, organization, schema)
    override = _stored_flags(_override(user), schema)
    org_flags = _stored_flags(organization.permissions if organization else None, schema)

    result = []
    for key in schema.keys:
        if not effective.inherited_from_org:
            source = PermissionSource.USER_OVERRIDE if key in override else PermissionSource.DEFAULT
        elif key in org_flags:
            source = PermissionSource.ORGANIZATION
        else:
            source = PermissionSource.DEFAULT
        result.append(EffectiveFlag(key=key, value=effective.flags[key], source=source))
    return result
