"""PostgreSQL organization repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from orgperms.domain.entities import Organization, PermissionSet

_COLUMNS = "id, name, permissions, created_at, updated_at"


def _row_to_organization(r: tuple) -> Organization:
    return Organization(
        id=r[0],
        name=r[1],
        permissions=PermissionSet.from_document(r[2]),
        created_at=r[3],
        updated_at=r[4],
    )


class PostgresOrganizationRepository:
    """Organization repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, org_id: str) -> Organization | None:
        """Get organization by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM organization WHERE id = %s",
            (org_id,),
        )
        r = await cur.fetchone()
        return _row_to_organization(r) if r else None

    async def create(self, organization: Organization) -> Organization:
        """Create organization."""
        permissions = organization.permissions
        await self._conn.execute(
            f"INSERT INTO organization ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
            (
                organization.id,
                organization.name,
                Jsonb(permissions.to_document()) if permissions else None,
                organization.created_at,
                organization.updated_at,
            ),
        )
        return organization

    async def update_permissions(self, org_id: str, permissions: PermissionSet) -> None:
        """Replace the stored permission document."""
        await self._conn.execute(
            "UPDATE organization SET permissions = %s, updated_at = NOW() WHERE id = %s",
            (Jsonb(permissions.to_document()), org_id),
        )

    async def patch_permissions(self, org_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        """Merge only the patched keys so concurrent edits of other keys survive."""
        await self._conn.execute(
            "UPDATE organization SET permissions = COALESCE(permissions, %s) || %s, "
            "updated_at = NOW() WHERE id = %s",
            (Jsonb(base.to_document()), Jsonb(patch.to_document()), org_id),
        )
