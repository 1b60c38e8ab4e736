"""Application entry point and composition root."""

import logging

from falcon.asgi import App

from orgperms import __version__
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.application.use_cases.audit.query_log import QueryPermissionLogUseCase
from orgperms.application.use_cases.permission.apply_org_defaults import ApplyOrgDefaultsUseCase
from orgperms.application.use_cases.permission.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from orgperms.application.use_cases.permission.reset_user import ResetUserUseCase
from orgperms.application.use_cases.permission.set_organization_permissions import (
    SetOrganizationPermissionsUseCase,
)
from orgperms.application.use_cases.permission.set_permission import SetPermissionUseCase
from orgperms.config import Settings, get_settings
from orgperms.domain.services import DEFAULT_SCHEMA
from orgperms.infrastructure.auth.keycloak_provider import KeycloakProvider
from orgperms.infrastructure.permission.actor_authorizer import RoleActorAuthorizer
from orgperms.infrastructure.persistence.postgres.connection import check_connection, create_pool
from orgperms.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from orgperms.interfaces.api.app import ApiResources, create_app
from orgperms.interfaces.api.middleware.auth import AuthMiddleware
from orgperms.interfaces.api.middleware.cors import CORSMiddleware
from orgperms.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_orgperms_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)
    schema = DEFAULT_SCHEMA

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; bearer tokens will be rejected")

    authorizer = RoleActorAuthorizer(
        uow_factory,
        home_org_id=settings.home_org_id,
        super_admin_role=settings.super_admin_role,
        admin_role=settings.admin_role,
    )
    audit_log = AuditLogWriter(uow_factory)

    set_permission = SetPermissionUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        audit_log=audit_log,
        home_org_id=settings.home_org_id,
        schema=schema,
    )
    set_organization_permissions = SetOrganizationPermissionsUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        audit_log=audit_log,
        home_org_id=settings.home_org_id,
        schema=schema,
    )
    apply_org_defaults = ApplyOrgDefaultsUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        audit_log=audit_log,
    )
    reset_user = ResetUserUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        audit_log=audit_log,
        schema=schema,
    )
    get_effective_permissions = GetEffectivePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        schema=schema,
    )
    query_permission_log = QueryPermissionLogUseCase(
        unit_of_work_factory=uow_factory,
        authorizer=authorizer,
        default_page_size=settings.log_page_size,
        max_page_size=settings.log_max_page_size,
    )

    resources = ApiResources(
        health=HealthResource(readiness_check=lambda: check_connection(pool)),
        schema=PermissionSchemaResource(schema),
        organization_permissions=OrganizationPermissionsResource(
            uow_factory, authorizer, set_organization_permissions, schema
        ),
        organization_permission=OrganizationPermissionResource(set_permission),
        organization_apply=OrganizationApplyResource(apply_org_defaults),
        user_permissions=UserPermissionsResource(get_effective_permissions),
        user_permission=UserPermissionResource(set_permission),
        user_reset=UserResetResource(reset_user),
        permission_logs=PermissionLogsResource(query_permission_log),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    logger.info("orgperms v%s starting (%s)", __version__, settings.environment)
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def main() -> None:
    """CLI entry point - run uvicorn server."""
    import uvicorn

    uvicorn.run(create_orgperms_app(), host="0.0.0.0", port=8000)
