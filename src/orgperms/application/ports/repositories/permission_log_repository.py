"""Permission log repository port."""

from typing import Protocol

from orgperms.application.dto.permission_log_dto import LogFilters
from orgperms.domain.entities import PermissionLog


class PermissionLogRepository(Protocol):
    """Port for the append-only permission log."""

    async def create(self, log: PermissionLog) -> PermissionLog: ...

    async def list(
        self,
        filters: LogFilters,
        *,
        cursor: str | None = None,
        limit: int = 25,
    ) -> tuple[list[PermissionLog], str | None]: ...
