"""Role-based actor authorizer - checks the actor's user record."""

from orgperms.application.dto.actor import Actor


class RoleActorAuthorizer:
    """Allows super admins anywhere and admins of the home organization."""

    def __init__(
        self,
        unit_of_work_factory: type,
        home_org_id: str,
        super_admin_role: str = "SuperAdmin",
        admin_role: str = "Admin",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._home_org_id = home_org_id
        self._super_admin_role = super_admin_role
        self._admin_role = admin_role

    async def can_manage_permissions(self, actor: Actor) -> bool:
        """Check whether actor may manage permissions."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(actor.id)
        if not user:
            return False
        if user.role == self._super_admin_role:
            return True
        return user.role == self._admin_role and user.organization_id == self._home_org_id
