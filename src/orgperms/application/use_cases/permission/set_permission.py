"""Set a single permission flag on an organization or a user."""

import logging
from datetime import UTC, datetime

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.mutation_dto import MutationResult
from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.application.use_cases.permission.support import ensure_can_manage, record_change
from orgperms.domain.entities import PermissionSet
from orgperms.domain.exceptions import Forbidden, NotFound, ValidationError
from orgperms.domain.services import DEFAULT_SCHEMA, PermissionSchema, diff_permissions
from orgperms.domain.value_objects import LogAction, PermissionScope

logger = logging.getLogger(__name__)


class SetPermissionUseCase:
    """Write one flag, refresh lastUpdated, log an ``update`` entry.

    A user-scoped edit always turns inheritance off for that user.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        audit_log: AuditLogWriter,
        home_org_id: str,
        schema: PermissionSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._audit_log = audit_log
        self._home_org_id = home_org_id
        self._schema = schema

    async def execute(
        self,
        actor: Actor,
        scope: PermissionScope,
        target_id: str,
        key: str,
        value: bool,
        notes: str | None = None,
    ) -> MutationResult:
        """Set ``key`` to ``value`` on the target's stored permission set.

        A target with no stored set starts from the schema defaults.
        """
        permission_key = self._schema.parse_key(key)
        if not isinstance(value, bool):
            raise ValidationError(f"Permission value must be a boolean, got {value!r}")
        if scope == PermissionScope.ORGANIZATION and target_id == self._home_org_id:
            raise Forbidden(f"Permissions of organization {target_id} are fixed")
        await ensure_can_manage(self._authorizer, actor)

        now = datetime.now(UTC)
        defaults = PermissionSet(flags=dict(self._schema.defaults))
        async with self._uow_factory() as uow:
            if scope == PermissionScope.ORGANIZATION:
                org = await uow.organizations.get_by_id(target_id)
                if not org:
                    raise NotFound("Organization", target_id)
                before = org.permissions or defaults
                patch = PermissionSet(flags={permission_key: value}, last_updated=now)
                after = before.merged(patch)
                await uow.organizations.patch_permissions(org.id, patch, base=defaults)
                entry = PermissionLogInput(
                    org_id=org.id,
                    org_name=org.name,
                    scope=scope,
                    action=LogAction.UPDATE,
                    actor_id=actor.id,
                    actor_email=actor.email,
                    changed=[],
                    notes=notes,
                )
            else:
                user = await uow.users.get_by_id(target_id)
                if not user:
                    raise NotFound("User", target_id)
                before = user.permissions or defaults
                patch = PermissionSet(
                    flags={permission_key: value}, last_updated=now, inherited_from_org=False
                )
                after = before.merged(patch)
                await uow.users.patch_permissions(user.id, patch, base=defaults)
                org = await uow.organizations.get_by_id(user.organization_id)
                entry = PermissionLogInput(
                    org_id=user.organization_id,
                    org_name=org.name if org else None,
                    user_id=user.id,
                    user_email=user.email,
                    scope=scope,
                    action=LogAction.UPDATE,
                    actor_id=actor.id,
                    actor_email=actor.email,
                    changed=[],
                    notes=notes,
                )

        entry.changed = diff_permissions(before, after, self._schema)
        logger.info(
            "%s set %s=%s on %s %s",
            actor.label,
            permission_key,
            value,
            scope,
            target_id,
        )
        log = await record_change(self._audit_log, entry)
        return MutationResult(
            scope=scope,
            target_id=target_id,
            log=log,
            changes=entry.changed,
            permissions=after,
        )
