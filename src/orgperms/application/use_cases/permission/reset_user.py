"""Reset one user to organization defaults."""

import logging
from dataclasses import replace
from datetime import UTC, datetime

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.mutation_dto import MutationResult
from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.application.use_cases.permission.support import ensure_can_manage, record_change
from orgperms.domain.entities import PermissionSet
from orgperms.domain.exceptions import NotFound
from orgperms.domain.services import DEFAULT_SCHEMA, PermissionSchema, diff_permissions, resolve
from orgperms.domain.value_objects import LogAction, PermissionScope

logger = logging.getLogger(__name__)


class ResetUserUseCase:
    """Turn inheritance back on for one user; the stored override is kept."""

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        audit_log: AuditLogWriter,
        schema: PermissionSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._audit_log = audit_log
        self._schema = schema

    async def execute(self, actor: Actor, user_id: str, notes: str | None = None) -> MutationResult:
        """Reset ``user_id``; the logged diff is between effective permissions."""
        await ensure_can_manage(self._authorizer, actor)

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)
            org = await uow.organizations.get_by_id(user.organization_id)
            if not org:
                raise NotFound("Organization", user.organization_id)

            before = resolve(user, org, self._schema)
            stored = replace(
                user.permissions or PermissionSet(),
                inherited_from_org=True,
                last_updated=now,
            )
            await uow.users.update_permissions(user.id, stored)
            after = resolve(replace(user, permissions=stored), org, self._schema)

        changes = diff_permissions(before, after, self._schema)
        logger.info(
            "%s reset user %s to organization %s defaults (%d keys changed)",
            actor.label,
            user.id,
            org.id,
            len(changes),
        )
        log = await record_change(
            self._audit_log,
            PermissionLogInput(
                org_id=org.id,
                org_name=org.name,
                user_id=user.id,
                user_email=user.email,
                scope=PermissionScope.USER,
                action=LogAction.RESET,
                actor_id=actor.id,
                actor_email=actor.email,
                changed=changes,
                notes=notes,
            ),
        )
        return MutationResult(
            scope=PermissionScope.USER,
            target_id=user.id,
            log=log,
            changes=changes,
            permissions=stored,
        )
