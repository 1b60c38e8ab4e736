"""Query permission log use case."""

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.permission_log_dto import LogFilters, PermissionLogPage
from orgperms.application.ports import ActorAuthorizer
from orgperms.domain.exceptions import Forbidden


class QueryPermissionLogUseCase:
    """Filtered, cursor-paginated permission history, newest first."""

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        default_page_size: int = 25,
        max_page_size: int = 100,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def execute(
        self,
        actor: Actor,
        filters: LogFilters | None = None,
        page_size: int | None = None,
        cursor: str | None = None,
    ) -> PermissionLogPage:
        """Return one page of entries matching ``filters``."""
        if not await self._authorizer.can_manage_permissions(actor):
            raise Forbidden("Actor may not read permission history")

        limit = self._default_page_size if page_size is None else page_size
        limit = min(max(limit, 1), self._max_page_size)

        async with self._uow_factory() as uow:
            entries, next_cursor = await uow.permission_logs.list(
                filters or LogFilters(),
                cursor=cursor,
                limit=limit,
            )
        return PermissionLogPage(entries=entries, next_cursor=next_cursor)
