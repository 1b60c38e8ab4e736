"""User permission resources."""

import falcon.asgi

from orgperms.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from orgperms.application.use_cases.permission.reset_user import ResetUserUseCase
from orgperms.application.use_cases.permission.set_permission import SetPermissionUseCase
from orgperms.domain.exceptions import OrgPermsError
from orgperms.domain.value_objects import PermissionScope
from orgperms.interfaces.api.errors import bad_request, error_response, unauthorized
from orgperms.interfaces.api.serializers import mutation_to_dict, permission_set_to_dict


class UserPermissionsResource:
    """GET /v1/users/{user_id}/permissions - effective permissions and their sources."""

    def __init__(self, get_effective_permissions: GetEffectivePermissionsUseCase) -> None:
        self._get_effective = get_effective_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            result = await self._get_effective.execute(user, user_id)
        except OrgPermsError as e:
            error_response(resp, e)
            return

        resp.media = {
            "user_id": result.user.id,
            "email": result.user.email,
            "organization_id": result.user.organization_id,
            "organization_name": result.organization.name if result.organization else None,
            "inherited_from_org": result.effective.inherited_from_org,
            "effective": result.effective.to_dict(),
            "stored": permission_set_to_dict(result.user.permissions),
            "flags": [
                {"key": f.key.value, "value": f.value, "source": f.source.value}
                for f in result.flags
            ],
        }
        resp.status = falcon.HTTP_200


class UserPermissionResource:
    """PATCH /v1/users/{user_id}/permissions/{key} - set one override flag."""

    def __init__(self, set_permission: SetPermissionUseCase) -> None:
        self._set_permission = set_permission

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        key: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media()
        if not isinstance(body, dict) or "value" not in body:
            bad_request(resp, "Missing required field: value")
            return

        try:
            result = await self._set_permission.execute(
                user,
                PermissionScope.USER,
                user_id,
                key,
                body["value"],
                notes=body.get("notes"),
            )
        except OrgPermsError as e:
            error_response(resp, e)
            return
        resp.media = mutation_to_dict(result)
        resp.status = falcon.HTTP_200


class UserResetResource:
    """POST /v1/users/{user_id}/permissions/reset - back to organization defaults."""

    def __init__(self, reset_user: ResetUserUseCase) -> None:
        self._reset = reset_user

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media(default_when_empty={})
        notes = body.get("notes") if isinstance(body, dict) else None
        try:
            result = await self._reset.execute(user, user_id, notes=notes)
        except OrgPermsError as e:
            error_response(resp, e)
            return
        resp.media = mutation_to_dict(result)
        resp.status = falcon.HTTP_200
