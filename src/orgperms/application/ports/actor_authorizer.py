"""Actor authorizer port - who may manage permissions."""

from typing import Protocol

from orgperms.application.dto.actor import Actor


class ActorAuthorizer(Protocol):
    """Port deciding whether an actor may read or change permissions."""

    async def can_manage_permissions(self, actor: Actor) -> bool: ...
