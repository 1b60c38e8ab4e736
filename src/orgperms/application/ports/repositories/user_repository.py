"""User repository port."""

from datetime import datetime
from typing import Protocol

from orgperms.domain.entities import PermissionSet, User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def list_by_organization(self, org_id: str) -> list[User]: ...

    async def create(self, user: User) -> User: ...

    async def update_permissions(self, user_id: str, permissions: PermissionSet) -> None: ...

    async def patch_permissions(self, user_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        """Merge the fields set on ``patch`` into the stored override; an absent one starts from ``base``."""
        ...

    async def mark_inherited_by_organization(self, org_id: str, updated_at: datetime) -> int:
        """Set inheritedFromOrg for every user of the org in one write; return count."""
        ...
