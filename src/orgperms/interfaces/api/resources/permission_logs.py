"""Permission log resource."""

from datetime import UTC, datetime

import falcon.asgi

from orgperms.application.dto.permission_log_dto import LogFilters
from orgperms.application.use_cases.audit.query_log import QueryPermissionLogUseCase
from orgperms.domain.exceptions import OrgPermsError
from orgperms.domain.value_objects import PermissionScope
from orgperms.interfaces.api.errors import bad_request, error_response, unauthorized
from orgperms.interfaces.api.serializers import log_to_dict


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    # Log timestamps are stored in UTC.
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class PermissionLogsResource:
    """GET /v1/permission-logs - filtered history, newest first."""

    def __init__(self, query_permission_log: QueryPermissionLogUseCase) -> None:
        self._query = query_permission_log

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            scope = req.get_param("scope")
            filters = LogFilters(
                org_id=req.get_param("org_id"),
                user_id=req.get_param("user_id"),
                actor_id=req.get_param("actor_id"),
                actor_email=req.get_param("actor_email"),
                key=req.get_param("key"),
                scope=PermissionScope(scope) if scope else None,
                created_from=_parse_datetime(req.get_param("from")),
                created_to=_parse_datetime(req.get_param("to")),
            )
        except ValueError as e:
            bad_request(resp, str(e))
            return

        try:
            page = await self._query.execute(
                user,
                filters,
                page_size=req.get_param_as_int("limit"),
                cursor=req.get_param("cursor"),
            )
        except OrgPermsError as e:
            error_response(resp, e)
            return

        resp.media = {
            "items": [log_to_dict(log) for log in page.entries],
            "next_cursor": page.next_cursor,
        }
        resp.status = falcon.HTTP_200
