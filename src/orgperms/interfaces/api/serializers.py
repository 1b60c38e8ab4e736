"""JSON representations of domain objects."""

from orgperms.application.dto.mutation_dto import MutationResult
from orgperms.domain.entities import PermissionLog, PermissionSet


def permission_set_to_dict(permissions: PermissionSet | None) -> dict[str, object] | None:
    if permissions is None:
        return None
    return permissions.to_document()


def log_to_dict(log: PermissionLog) -> dict[str, object]:
    return {
        "id": str(log.id),
        "org_id": log.org_id,
        "org_name": log.org_name,
        "user_id": log.user_id,
        "user_email": log.user_email,
        "scope": log.scope.value,
        "action": log.action.value,
        "actor_id": log.actor_id,
        "actor_email": log.actor_email,
        "changed": [c.to_dict() for c in log.changed],
        "keys": log.keys,
        "notes": log.notes,
        "created_at": log.created_at.isoformat(),
    }


def mutation_to_dict(result: MutationResult) -> dict[str, object]:
    return {
        "scope": result.scope.value,
        "target_id": result.target_id,
        "changes": [c.to_dict() for c in result.changes],
        "permissions": permission_set_to_dict(result.permissions),
        "affected_users": result.affected_users,
        "log_id": str(result.log.id),
    }
