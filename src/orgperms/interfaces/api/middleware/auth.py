"""Auth middleware - resolves the request actor from a bearer token."""

import falcon.asgi

from orgperms.application.dto.actor import Actor

ANONYMOUS = Actor(id="anonymous")


class AuthMiddleware:
    """Validates bearer tokens and sets ``req.context.user`` to an Actor.

    No Authorization header yields the anonymous actor; a rejected token
    yields None, which resources answer with 401.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract actor from Authorization header."""
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            req.context.user = ANONYMOUS
            return

        req.context.user = None
        if self._keycloak:
            oidc_user = self._keycloak.decode_token(auth[7:])
            if oidc_user:
                req.context.user = Actor(
                    id=oidc_user.user_id,
                    email=oidc_user.email or oidc_user.username,
                )
