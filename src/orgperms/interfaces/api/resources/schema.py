"""Permission schema resource."""

import falcon.asgi

from orgperms.domain.services import PermissionSchema


class PermissionSchemaResource:
    """GET /v1/permissions/schema - canonical keys and their defaults."""

    def __init__(self, schema: PermissionSchema) -> None:
        self._schema = schema

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "items": [
                {"key": key.value, "default": self._schema.default_for(key)}
                for key in self._schema.keys
            ]
        }
        resp.status = falcon.HTTP_200
