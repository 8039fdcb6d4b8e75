"""PostgreSQL share repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from docshare.domain.entities import ShareEntry
from docshare.domain.value_objects import AccessLevel


class PostgresShareRepository:
    """Share entries of documents.

    ``document_share`` has a unique index on (document_id, user_id); every
    mutation is a single conditional statement so concurrent requests cannot
    create duplicates or lose updates.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def add(self, document_id: UUID, entry: ShareEntry) -> bool:
        cur = await self._conn.execute(
            "INSERT INTO document_share (document_id, user_id, access_level, shared_at) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (document_id, user_id) DO NOTHING "
            "RETURNING user_id",
            (document_id, entry.user_id, entry.access_level.value, entry.shared_at),
        )
        return await cur.fetchone() is not None

    async def update_access_level(
        self, document_id: UUID, user_id: UUID, access_level: AccessLevel
    ) -> bool:
        cur = await self._conn.execute(
            "UPDATE document_share SET access_level = %s "
            "WHERE document_id = %s AND user_id = %s",
            (access_level.value, document_id, user_id),
        )
        return cur.rowcount > 0

    async def remove(self, document_id: UUID, user_id: UUID) -> bool:
        cur = await self._conn.execute(
            "DELETE FROM document_share WHERE document_id = %s AND user_id = %s",
            (document_id, user_id),
        )
        return cur.rowcount > 0
