"""Replace an organization's whole permission set."""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.mutation_dto import MutationResult
from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.application.use_cases.permission.support import ensure_can_manage, record_change
from orgperms.domain.entities import PermissionSet
from orgperms.domain.exceptions import Forbidden, NotFound, ValidationError
from orgperms.domain.services import (
    DEFAULT_SCHEMA,
    PermissionSchema,
    Services,
    diff_permissions,
    permissions_for_services,
)
from orgperms.domain.value_objects import LogAction, PermissionKey, PermissionScope

logger = logging.getLogger(__name__)


class SetOrganizationPermissionsUseCase:
    """Set every flag of an organization at once and log a ``set`` entry.

    The new set comes either from an explicit flag map (missing keys take
    the schema default) or from the organization's subscribed services.
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

    def _build_flags(
        self, flags: Mapping[str, object] | None, services: Services | None
    ) -> dict[PermissionKey, bool]:
        if (flags is None) == (services is None):
            raise ValidationError("Provide either permission flags or services")
        if services is not None:
            mapped = permissions_for_services(services)
            return {k: mapped.get(k, self._schema.default_for(k)) for k in self._schema.keys}

        result = dict(self._schema.defaults)
        for name, value in flags.items():
            key = self._schema.parse_key(name)
            if not isinstance(value, bool):
                raise ValidationError(f"Permission {name} must be a boolean, got {value!r}")
            result[key] = value
        return result

    async def execute(
        self,
        actor: Actor,
        org_id: str,
        flags: Mapping[str, object] | None = None,
        services: Services | None = None,
        notes: str | None = None,
    ) -> MutationResult:
        """Replace the stored set of ``org_id``."""
        new_flags = self._build_flags(flags, services)
        if org_id == self._home_org_id:
            raise Forbidden(f"Permissions of organization {org_id} are fixed")
        await ensure_can_manage(self._authorizer, actor)

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            org = await uow.organizations.get_by_id(org_id)
            if not org:
                raise NotFound("Organization", org_id)
            before = org.permissions or PermissionSet(flags=dict(self._schema.defaults))
            after = PermissionSet(flags=new_flags, last_updated=now)
            await uow.organizations.update_permissions(org.id, after)

        changes = diff_permissions(before, after, self._schema)
        logger.info("%s set permissions of organization %s (%d keys changed)", actor.label, org_id, len(changes))
        log = await record_change(
            self._audit_log,
            PermissionLogInput(
                org_id=org.id,
                org_name=org.name,
                scope=PermissionScope.ORGANIZATION,
                action=LogAction.SET,
                actor_id=actor.id,
                actor_email=actor.email,
                changed=changes,
                notes=notes,
            ),
        )
        return MutationResult(
            scope=PermissionScope.ORGANIZATION,
            target_id=org.id,
            log=log,
            changes=changes,
            permissions=after,
        )
