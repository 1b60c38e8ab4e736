"""PostgreSQL permission log repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from orgperms.application.dto.permission_log_dto import LogFilters
from orgperms.domain.entities import PermissionLog
from orgperms.domain.value_objects import LogAction, LogCursor, PermissionChange, PermissionScope

_COLUMNS = (
    "id, org_id, org_name, user_id, user_email, scope, action, "
    "actor_id, actor_email, changed, keys, notes, created_at"
)


def _row_to_log(r: tuple) -> PermissionLog:
    return PermissionLog(
        id=r[0],
        org_id=r[1],
        org_name=r[2],
        user_id=r[3],
        user_email=r[4],
        scope=PermissionScope(r[5]),
        action=LogAction(r[6]),
        actor_id=r[7],
        actor_email=r[8],
        changed=[PermissionChange.from_dict(c) for c in r[9] or []],
        keys=list(r[10] or []),
        notes=r[11],
        created_at=r[12],
    )


def _build_log_filter_conditions(
    filters: LogFilters, cursor: str | None = None
) -> tuple[list[str], list[object]]:
    """Build WHERE conditions and params for a log query."""
    conditions: list[str] = []
    params: list[object] = []
    for column, value in (
        ("org_id", filters.org_id),
        ("user_id", filters.user_id),
        ("actor_id", filters.actor_id),
        ("actor_email", filters.actor_email),
        ("scope", filters.scope.value if filters.scope else None),
    ):
        if value is not None:
            conditions.append(f"{column} = %s")
            params.append(value)
    if filters.key is not None:
        conditions.append("keys @> ARRAY[%s]::text[]")
        params.append(filters.key)
    if filters.created_from is not None:
        conditions.append("created_at >= %s")
        params.append(filters.created_from)
    if filters.created_to is not None:
        conditions.append("created_at <= %s")
        params.append(filters.created_to)
    if cursor:
        after = LogCursor.decode(cursor)
        conditions.append("(created_at, id) < (%s, %s)")
        params.extend([after.created_at, after.id])
    return conditions, params


class PostgresPermissionLogRepository:
    """Append-only permission log. No update or delete."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, log: PermissionLog) -> PermissionLog:
        """Insert log entry."""
        await self._conn.execute(
            f"INSERT INTO permission_log ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                log.id,
                log.org_id,
                log.org_name,
                log.user_id,
                log.user_email,
                log.scope.value,
                log.action.value,
                log.actor_id,
                log.actor_email,
                Jsonb([c.to_dict() for c in log.changed]),
                log.keys,
                log.notes,
                log.created_at,
            ),
        )
        return log

    async def list(
        self,
        filters: LogFilters,
        *,
        cursor: str | None = None,
        limit: int = 25,
    ) -> tuple[list[PermissionLog], str | None]:
        """List entries newest first with cursor pagination."""
        conditions, _params = _build_log_filter_conditions(filters, cursor)
        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        params = tuple(_params) + (limit + 1,)
        q = (
            f"SELECT {_COLUMNS} FROM permission_log{where} "
            "ORDER BY created_at DESC, id DESC LIMIT %s"
        )
        cur = await self._conn.execute(q, params)
        rows = await cur.fetchall()
        logs = [_row_to_log(r) for r in rows[:limit]]
        next_cursor = None
        if len(rows) > limit:
            last = logs[-1]
            next_cursor = LogCursor(created_at=last.created_at, id=last.id).encode()
        return logs, next_cursor
