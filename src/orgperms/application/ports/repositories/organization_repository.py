"""Organization repository port."""

from typing import Protocol

from orgperms.domain.entities import Organization, PermissionSet


class OrganizationRepository(Protocol):
    """Port for organization persistence."""

    async def get_by_id(self, org_id: str) -> Organization | None: ...

    async def create(self, organization: Organization) -> Organization: ...

    async def update_permissions(self, org_id: str, permissions: PermissionSet) -> None: ...

    async def patch_permissions(self, org_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        """Merge the fields set on ``patch`` into the stored set; an absent set starts from ``base``."""
        ...
