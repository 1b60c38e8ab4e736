"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from orgperms.application.dto.actor import Actor
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
from orgperms.domain.services import DEFAULT_SCHEMA
from orgperms.interfaces.api.app import ApiResources, create_app
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

from tests.conftest import HOME_ORG_ID, make_org, make_user

TEST_ACTOR = Actor(id="admin", email="admin@acme")


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing."""

    def __init__(self, actor: Actor | None = TEST_ACTOR) -> None:
        self._actor = actor

    async def process_request(self, req, resp):
        req.context.user = self._actor


def build_resources(uow_factory, authorizer, audit_log) -> ApiResources:
    set_permission = SetPermissionUseCase(uow_factory, authorizer, audit_log, home_org_id=HOME_ORG_ID)
    return ApiResources(
        health=HealthResource(),
        schema=PermissionSchemaResource(DEFAULT_SCHEMA),
        organization_permissions=OrganizationPermissionsResource(
            uow_factory,
            authorizer,
            SetOrganizationPermissionsUseCase(uow_factory, authorizer, audit_log, home_org_id=HOME_ORG_ID),
        ),
        organization_permission=OrganizationPermissionResource(set_permission),
        organization_apply=OrganizationApplyResource(
            ApplyOrgDefaultsUseCase(uow_factory, authorizer, audit_log)
        ),
        user_permissions=UserPermissionsResource(
            GetEffectivePermissionsUseCase(uow_factory, authorizer)
        ),
        user_permission=UserPermissionResource(set_permission),
        user_reset=UserResetResource(ResetUserUseCase(uow_factory, authorizer, audit_log)),
        permission_logs=PermissionLogsResource(
            QueryPermissionLogUseCase(uow_factory, authorizer, default_page_size=25, max_page_size=100)
        ),
    )


@pytest.fixture
def seeded_uow(fake_uow):
    """Acme with one inheriting member and a home organization."""
    fake_uow.organizations._by_id["acme"] = make_org("acme", "Acme", flags={})
    fake_uow.organizations._by_id[HOME_ORG_ID] = make_org(HOME_ORG_ID, "Local Focus")
    fake_uow.users._by_id["alice"] = make_user("alice")
    return fake_uow


@pytest.fixture
def app(seeded_uow, uow_factory, mock_authorizer, audit_log):
    """Falcon ASGI app with API resources for testing."""
    return create_app(
        build_resources(uow_factory, mock_authorizer, audit_log),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def anonymous_client(uow_factory, mock_authorizer, audit_log) -> TestClient:
    """Client whose bearer token was rejected."""
    app = create_app(
        build_resources(uow_factory, mock_authorizer, audit_log),
        middleware=[AuthBypassMiddleware(actor=None)],
    )
    return TestClient(app)
