"""PostgreSQL user repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from orgperms.domain.entities import PermissionSet, User

_COLUMNS = "id, email, name, organization_id, role, permissions, created_at, updated_at"


def _row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        email=r[1],
        name=r[2],
        organization_id=r[3],
        role=r[4],
        permissions=PermissionSet.from_document(r[5]),
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresUserRepository:
    """User repository implementation. Table is ``app_user``."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def list_by_organization(self, org_id: str) -> list[User]:
        """List users of organization."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE organization_id = %s ORDER BY name",
            (org_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_user(r) for r in rows]

    async def create(self, user: User) -> User:
        """Create user."""
        permissions = user.permissions
        await self._conn.execute(
            f"INSERT INTO app_user ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                user.id,
                user.email,
                user.name,
                user.organization_id,
                user.role,
                Jsonb(permissions.to_document()) if permissions else None,
                user.created_at,
                user.updated_at,
            ),
        )
        return user

    async def update_permissions(self, user_id: str, permissions: PermissionSet) -> None:
        """Replace the stored override document."""
        await self._conn.execute(
            "UPDATE app_user SET permissions = %s, updated_at = NOW() WHERE id = %s",
            (Jsonb(permissions.to_document()), user_id),
        )

    async def patch_permissions(self, user_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        """Merge only the patched keys so concurrent edits of other keys survive."""
        await self._conn.execute(
            "UPDATE app_user SET permissions = COALESCE(permissions, %s) || %s, "
            "updated_at = NOW() WHERE id = %s",
            (Jsonb(base.to_document()), Jsonb(patch.to_document()), user_id),
        )

    async def mark_inherited_by_organization(self, org_id: str, updated_at: datetime) -> int:
        """Flip inheritedFromOrg on for all members in one statement; flags are kept."""
        cur = await self._conn.execute(
            "UPDATE app_user SET permissions = COALESCE(permissions, '{}'::jsonb) "
            "|| jsonb_build_object('inheritedFromOrg', true, 'lastUpdated', %s::text), "
            "updated_at = %s WHERE organization_id = %s",
            (updated_at.isoformat(), updated_at, org_id),
        )
        return cur.rowcount
