"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from orgperms.domain.exceptions import StoreUnavailable
from orgperms.infrastructure.persistence.postgres.organization_repository import (
    PostgresOrganizationRepository,
)
from orgperms.infrastructure.persistence.postgres.permission_log_repository import (
    PostgresPermissionLogRepository,
)
from orgperms.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._organizations = PostgresOrganizationRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        self._permission_logs = PostgresPermissionLogRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def organizations(self) -> PostgresOrganizationRepository:
        return self._organizations

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def permission_logs(self) -> PostgresPermissionLogRepository:
        return self._permission_logs

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver and pool errors surface as StoreUnavailable.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            logger.error("Database operation failed: %s", e)
            raise StoreUnavailable(str(e)) from e

    return factory
