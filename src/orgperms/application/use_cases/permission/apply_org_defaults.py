"""Apply organization defaults to every member."""

import logging
from datetime import UTC, datetime

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.mutation_dto import MutationResult
from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.application.use_cases.permission.support import ensure_can_manage, record_change
from orgperms.domain.exceptions import InvalidState, NotFound
from orgperms.domain.value_objects import (
    INHERITED_FROM_ORG_FIELD,
    LogAction,
    PermissionChange,
    PermissionScope,
)

logger = logging.getLogger(__name__)

DEFAULT_NOTE = "Applied organization defaults to all users."


class ApplyOrgDefaultsUseCase:
    """Switch every user of an organization back to inheriting its permissions.

    Only the inheritance flag flips; stored override values stay in place
    and become active again if inheritance is later turned off.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        audit_log: AuditLogWriter,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._audit_log = audit_log

    async def execute(self, actor: Actor, org_id: str, notes: str | None = None) -> MutationResult:
        """Bulk-reset all members of ``org_id``. Returns the affected user count."""
        await ensure_can_manage(self._authorizer, actor)

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            org = await uow.organizations.get_by_id(org_id)
            if not org:
                raise NotFound("Organization", org_id)
            if org.permissions is None:
                raise InvalidState(f"Organization {org_id} has no permissions to apply")
            affected = await uow.users.mark_inherited_by_organization(org.id, now)

        logger.info("%s applied defaults of organization %s to %d users", actor.label, org_id, affected)
        changes = [PermissionChange(key=INHERITED_FROM_ORG_FIELD, from_value=False, to_value=True)]
        log = await record_change(
            self._audit_log,
            PermissionLogInput(
                org_id=org.id,
                org_name=org.name,
                scope=PermissionScope.ORGANIZATION,
                action=LogAction.RESET,
                actor_id=actor.id,
                actor_email=actor.email,
                changed=changes,
                notes=notes or DEFAULT_NOTE,
            ),
        )
        return MutationResult(
            scope=PermissionScope.ORGANIZATION,
            target_id=org.id,
            log=log,
            changes=changes,
            permissions=org.permissions,
            affected_users=affected,
        )
