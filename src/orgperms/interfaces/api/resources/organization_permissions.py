"""Organization permission resources."""

import falcon.asgi

from orgperms.application.ports import ActorAuthorizer
from orgperms.application.use_cases.permission.apply_org_defaults import ApplyOrgDefaultsUseCase
from orgperms.application.use_cases.permission.set_organization_permissions import (
    SetOrganizationPermissionsUseCase,
)
from orgperms.application.use_cases.permission.set_permission import SetPermissionUseCase
from orgperms.domain.exceptions import Forbidden, OrgPermsError
from orgperms.domain.services import DEFAULT_SCHEMA, PermissionSchema, Services, resolve
from orgperms.domain.value_objects import PermissionScope
from orgperms.interfaces.api.errors import bad_request, error_response, unauthorized
from orgperms.interfaces.api.serializers import mutation_to_dict, permission_set_to_dict


class OrganizationPermissionsResource:
    """GET/PUT /v1/organizations/{org_id}/permissions - read or replace the org set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        authorizer: ActorAuthorizer,
        set_organization_permissions: SetOrganizationPermissionsUseCase,
        schema: PermissionSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._authorizer = authorizer
        self._set_all = set_organization_permissions
        self._schema = schema

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        org_id: str,
    ) -> None:
        """Stored permissions of organization and what members inherit."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            if not await self._authorizer.can_manage_permissions(user):
                raise Forbidden("Actor may not read organization permissions")
            async with self._uow_factory() as uow:
                org = await uow.organizations.get_by_id(org_id)
        except OrgPermsError as e:
            error_response(resp, e)
            return
        if not org:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"Organization not found: {org_id}", "kind": "NotFound"}
            return

        resp.media = {
            "id": org.id,
            "name": org.name,
            "permissions": permission_set_to_dict(org.permissions),
            "inherited": resolve(None, org, self._schema).to_dict(),
        }
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        org_id: str,
    ) -> None:
        """Replace permissions from ``permissions`` flags or ``services``."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            bad_request(resp, "Request body must be a JSON object")
            return
        flags = body.get("permissions")
        services = None
        if body.get("services") is not None:
            raw = body["services"]
            if not isinstance(raw, dict):
                bad_request(resp, "services must be an object")
                return
            services = Services(
                instant_incidents=bool(raw.get("instantIncidents")),
                weekly_reports=bool(raw.get("weeklyReports")),
                monthly_reports=bool(raw.get("monthlyReports")),
                ai_reports=bool(raw.get("aiReports")),
                other=bool(raw.get("other")),
            )
        if flags is not None and not isinstance(flags, dict):
            bad_request(resp, "permissions must be an object")
            return

        try:
            result = await self._set_all.execute(
                user, org_id, flags=flags, services=services, notes=body.get("notes")
            )
        except OrgPermsError as e:
            error_response(resp, e)
            return
        resp.media = mutation_to_dict(result)
        resp.status = falcon.HTTP_200


class OrganizationPermissionResource:
    """PATCH /v1/organizations/{org_id}/permissions/{key} - set one flag."""

    def __init__(self, set_permission: SetPermissionUseCase) -> None:
        self._set_permission = set_permission

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        org_id: str,
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
                PermissionScope.ORGANIZATION,
                org_id,
                key,
                body["value"],
                notes=body.get("notes"),
            )
        except OrgPermsError as e:
            error_response(resp, e)
            return
        resp.media = mutation_to_dict(result)
        resp.status = falcon.HTTP_200


class OrganizationApplyResource:
    """POST /v1/organizations/{org_id}/permissions/apply - all members inherit."""

    def __init__(self, apply_org_defaults: ApplyOrgDefaultsUseCase) -> None:
        self._apply = apply_org_defaults

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        org_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media(default_when_empty={})
        notes = body.get("notes") if isinstance(body, dict) else None
        try:
            result = await self._apply.execute(user, org_id, notes=notes)
        except OrgPermsError as e:
            error_response(resp, e)
            return
        resp.media = mutation_to_dict(result)
        resp.status = falcon.HTTP_200
