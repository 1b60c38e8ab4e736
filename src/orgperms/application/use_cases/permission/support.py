"""Helpers shared by permission mutation use cases."""

import logging

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.domain.entities import PermissionLog
from orgperms.domain.exceptions import Forbidden

logger = logging.getLogger(__name__)


async def ensure_can_manage(authorizer: ActorAuthorizer, actor: Actor) -> None:
    """Raise Forbidden unless ``actor`` may change permissions."""
    if not await authorizer.can_manage_permissions(actor):
        logger.warning("Actor %s refused permission management", actor.label)
        raise Forbidden("Actor may not manage permissions")


async def record_change(writer: AuditLogWriter, entry: PermissionLogInput) -> PermissionLog:
    """Append the log entry for a change whose state write already committed.

    The state write and the append are separate units of work; a failure
    here leaves the change applied without an audit record.
    """
    try:
        return await writer.append(entry)
    except Exception:
        logger.exception(
            "Permission change on %s %s applied but audit entry was not written",
            entry.scope,
            entry.user_id or entry.org_id,
        )
        raise
