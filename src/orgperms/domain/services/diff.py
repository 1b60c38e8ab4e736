"""Field-level diff between two permission snapshots."""

from collections.abc import Mapping

from orgperms.domain.entities import PermissionSet
from orgperms.domain.services.schema import DEFAULT_SCHEMA, PermissionSchema
from orgperms.domain.value_objects import EffectivePermissions, PermissionChange, PermissionKey

Snapshot = PermissionSet | EffectivePermissions | Mapping[str, bool | None] | None


def _value(snapshot: Snapshot, key: PermissionKey) -> bool | None:
    if snapshot is None:
        return None
    if isinstance(snapshot, (PermissionSet, EffectivePermissions)):
        return snapshot.flags.get(key)
    return snapshot.get(key)


def diff_permissions(
    before: Snapshot,
    after: Snapshot,
    schema: PermissionSchema = DEFAULT_SCHEMA,
) -> list[PermissionChange]:
    """Changed keys in canonical order. A missing value counts as None."""
    changes = []
    for key in schema.keys:
        from_value = _value(before, key)
        to_value = _value(after, key)
        if from_value != to_value:
            changes.append(PermissionChange(key=key.value, from_value=from_value, to_value=to_value))
    return changes
