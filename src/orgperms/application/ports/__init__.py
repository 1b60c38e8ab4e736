"""Application ports - interfaces for external adapters."""

from orgperms.application.ports.actor_authorizer import ActorAuthorizer
from orgperms.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "ActorAuthorizer",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
