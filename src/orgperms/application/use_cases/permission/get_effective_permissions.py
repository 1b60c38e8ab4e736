"""Get effective permissions use case."""

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.effective_permissions_dto import EffectivePermissionsOutput
from orgperms.application.ports import ActorAuthorizer
from orgperms.domain.exceptions import Forbidden, NotFound
from orgperms.domain.services import DEFAULT_SCHEMA, PermissionSchema, explain, resolve


class GetEffectivePermissionsUseCase:
    """Resolve a user's effective permissions. Users may always read their own."""

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        schema: PermissionSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._schema = schema

    async def execute(self, actor: Actor, user_id: str) -> EffectivePermissionsOutput:
        if actor.id != user_id and not await self._authorizer.can_manage_permissions(actor):
            raise Forbidden("Actor may not read permissions of other users")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                raise NotFound("User", user_id)
            org = await uow.organizations.get_by_id(user.organization_id)

        return EffectivePermissionsOutput(
            user=user,
            organization=org,
            effective=resolve(user, org, self._schema),
            flags=explain(user, org, self._schema),
        )
