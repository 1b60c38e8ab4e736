"""Audit log writer - appends immutable permission change records."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from orgperms.application.dto.permission_log_dto import PermissionLogInput
from orgperms.domain.entities import PermissionLog
from orgperms.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AuditLogWriter:
    """Assign id and creation time, index changed keys, persist."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def append(self, entry: PermissionLogInput) -> PermissionLog:
        """Persist ``entry`` as a new record. Records are never updated."""
        if not entry.org_id:
            raise ValidationError("Permission log entry requires an organization id")
        if not entry.actor_id:
            raise ValidationError("Permission log entry requires an actor id")

        log = PermissionLog(
            id=uuid4(),
            org_id=entry.org_id,
            org_name=entry.org_name,
            user_id=entry.user_id,
            user_email=entry.user_email,
            scope=entry.scope,
            action=entry.action,
            actor_id=entry.actor_id,
            actor_email=entry.actor_email,
            changed=list(entry.changed),
            keys=[c.key for c in entry.changed],
            notes=entry.notes or None,
            created_at=datetime.now(UTC),
        )
        async with self._uow_factory() as uow:
            await uow.permission_logs.create(log)

        logger.debug(
            "Permission log %s appended: %s %s on %s",
            log.id,
            log.action,
            log.scope,
            log.user_id or log.org_id,
        )
        return log
