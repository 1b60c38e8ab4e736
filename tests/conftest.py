"""Pytest fixtures for orgperms tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from orgperms.application.dto.actor import Actor
from orgperms.application.dto.permission_log_dto import LogFilters
from orgperms.application.use_cases.audit.append_log import AuditLogWriter
from orgperms.domain.entities import Organization, PermissionLog, PermissionSet, User
from orgperms.domain.value_objects import LogCursor, PermissionKey

HOME_ORG_ID = "LOCAL_FOCUS_ORG_ID"


# --- Fake repositories ---


class FakeOrganizationRepository:
    """In-memory organization repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Organization] = {}

    async def get_by_id(self, org_id: str) -> Organization | None:
        return self._by_id.get(org_id)

    async def create(self, organization: Organization) -> Organization:
        self._by_id[organization.id] = organization
        return organization

    async def update_permissions(self, org_id: str, permissions: PermissionSet) -> None:
        org = self._by_id[org_id]
        self._by_id[org_id] = replace(org, permissions=permissions, updated_at=datetime.now(UTC))

    async def patch_permissions(self, org_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        org = self._by_id[org_id]
        merged = (org.permissions or base).merged(patch)
        self._by_id[org_id] = replace(org, permissions=merged, updated_at=datetime.now(UTC))


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def list_by_organization(self, org_id: str) -> list[User]:
        return [u for u in self._by_id.values() if u.organization_id == org_id]

    async def create(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    async def update_permissions(self, user_id: str, permissions: PermissionSet) -> None:
        user = self._by_id[user_id]
        self._by_id[user_id] = replace(user, permissions=permissions, updated_at=datetime.now(UTC))

    async def patch_permissions(self, user_id: str, patch: PermissionSet, base: PermissionSet) -> None:
        user = self._by_id[user_id]
        merged = (user.permissions or base).merged(patch)
        self._by_id[user_id] = replace(user, permissions=merged, updated_at=datetime.now(UTC))

    async def mark_inherited_by_organization(self, org_id: str, updated_at: datetime) -> int:
        count = 0
        for user in await self.list_by_organization(org_id):
            stored = replace(
                user.permissions or PermissionSet(),
                inherited_from_org=True,
                last_updated=updated_at,
            )
            self._by_id[user.id] = replace(user, permissions=stored, updated_at=updated_at)
            count += 1
        return count


class FakePermissionLogRepository:
    """In-memory append-only permission log."""

    def __init__(self) -> None:
        self.entries: list[PermissionLog] = []

    async def create(self, log: PermissionLog) -> PermissionLog:
        self.entries.append(log)
        return log

    async def list(
        self,
        filters: LogFilters,
        *,
        cursor: str | None = None,
        limit: int = 25,
    ) -> tuple[list[PermissionLog], str | None]:
        items = [e for e in self.entries if filters.matches(e)]
        items.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        if cursor:
            after = LogCursor.decode(cursor)
            items = [e for e in items if (e.created_at, e.id) < (after.created_at, after.id)]
        page = items[: limit + 1]
        next_cursor = None
        if len(page) > limit:
            last = page[limit - 1]
            next_cursor = LogCursor(created_at=last.created_at, id=last.id).encode()
        return page[:limit], next_cursor


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.organizations = FakeOrganizationRepository()
        self.users = FakeUserRepository()
        self.permission_logs = FakePermissionLogRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def make_org(
    org_id: str = "acme",
    name: str = "Acme",
    flags: dict[PermissionKey, bool] | None = None,
) -> Organization:
    now = datetime.now(UTC)
    return Organization(
        id=org_id,
        name=name,
        created_at=now,
        updated_at=now,
        permissions=PermissionSet(flags=flags, last_updated=now) if flags is not None else None,
    )


def make_user(
    user_id: str = "alice",
    org_id: str = "acme",
    role: str = "User",
    flags: dict[PermissionKey, bool] | None = None,
    inherited_from_org: bool | None = None,
) -> User:
    now = datetime.now(UTC)
    permissions = None
    if flags is not None or inherited_from_org is not None:
        permissions = PermissionSet(flags=flags or {}, inherited_from_org=inherited_from_org)
    return User(
        id=user_id,
        email=f"{user_id}@{org_id}.example",
        name=user_id.title(),
        organization_id=org_id,
        role=role,
        created_at=now,
        updated_at=now,
        permissions=permissions,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def mock_authorizer():
    """AsyncMock for ActorAuthorizer - allows by default."""
    mock = AsyncMock()
    mock.can_manage_permissions.return_value = True
    return mock


@pytest.fixture
def audit_log(uow_factory) -> AuditLogWriter:
    return AuditLogWriter(uow_factory)


@pytest.fixture
def admin() -> Actor:
    return Actor(id="admin", email="admin@acme")
