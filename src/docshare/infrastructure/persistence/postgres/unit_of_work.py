"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from docshare.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from docshare.infrastructure.persistence.postgres.share_repository import (
    PostgresShareRepository,
)
from docshare.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """One pooled connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: AsyncConnection | None = None
        self._conn_cm: AbstractAsyncContextManager | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._documents = PostgresDocumentRepository(self._conn)
        self._shares = PostgresShareRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def shares(self) -> PostgresShareRepository:
        return self._shares

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(
    pool: AsyncConnectionPool,
) -> Callable[[], AbstractAsyncContextManager[PostgresUnitOfWork]]:
    """Create UnitOfWork factory: commits on clean exit, rolls back on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
