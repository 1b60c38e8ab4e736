"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from orgperms.interfaces.api.errors import handle_unexpected
from orgperms.interfaces.api.resources.health import HealthResource
from orgperms.interfaces.api.resources.organization_permissions import (
    OrganizationApplyResource,
    OrganizationPermissionResource,
    OrganizationPermissionsResource,
)
from orgperms.interfaces.api.resources.permission_logs import PermissionLogsResource
from orgperms.interfaces.api.resources.schema import PermissionSchemaResource
from orgperms.interfaces.api.resources.user_permissions import (
    UserPermissionResource,
    UserPermissionsResource,
    UserResetResource,
)


@dataclass
class ApiResources:
    """All resources served by the API."""

    health: HealthResource
    schema: PermissionSchemaResource
    organization_permissions: OrganizationPermissionsResource
    organization_permission: OrganizationPermissionResource
    organization_apply: OrganizationApplyResource
    user_permissions: UserPermissionsResource
    user_permission: UserPermissionResource
    user_reset: UserResetResource
    permission_logs: PermissionLogsResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/permissions/schema", resources.schema)
    app.add_route("/v1/organizations/{org_id}/permissions", resources.organization_permissions)
    app.add_route(
        "/v1/organizations/{org_id}/permissions/apply", resources.organization_apply
    )
    app.add_route(
        "/v1/organizations/{org_id}/permissions/{key}", resources.organization_permission
    )
    app.add_route("/v1/users/{user_id}/permissions", resources.user_permissions)
    app.add_route("/v1/users/{user_id}/permissions/reset", resources.user_reset)
    app.add_route("/v1/users/{user_id}/permissions/{key}", resources.user_permission)
    app.add_route("/v1/permission-logs", resources.permission_logs)
    return app
