"""PostgreSQL document repository implementation."""

from collections import defaultdict
from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from docshare.domain.entities import ContentRef, Document, ShareEntry
from docshare.domain.value_objects import AccessLevel, DocumentType

_COLUMNS = (
    "d.id, d.title, d.description, d.document_type, d.file_url, d.storage_key, "
    "d.owner_id, d.created_at, d.updated_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        title=r[1],
        description=r[2],
        document_type=DocumentType(r[3]),
        content_ref=ContentRef(url=r[4], storage_key=r[5]),
        owner_id=r[6],
        created_at=r[7],
        updated_at=r[8],
    )


class PostgresDocumentRepository:
    """Document repository implementation.

    Every loaded document carries its ``shared_with`` list, fetched with one
    extra query per call regardless of the number of documents.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _attach_shares(self, documents: list[Document]) -> list[Document]:
        if not documents:
            return documents
        cur = await self._conn.execute(
            "SELECT document_id, user_id, access_level, shared_at FROM document_share "
            "WHERE document_id = ANY(%s) ORDER BY seq",
            ([d.id for d in documents],),
        )
        rows = await cur.fetchall()
        by_doc: dict[UUID, list[ShareEntry]] = defaultdict(list)
        for r in rows:
            by_doc[r[0]].append(
                ShareEntry(user_id=r[1], access_level=AccessLevel(r[2]), shared_at=r[3])
            )
        for d in documents:
            d.shared_with = by_doc.get(d.id, [])
        return documents

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None:
        """Get document by id. ``for_update`` takes a row lock held until commit."""
        q = f"SELECT {_COLUMNS} FROM document d WHERE d.id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (document_id,))
        r = await cur.fetchone()
        if not r:
            return None
        (doc,) = await self._attach_shares([_row_to_document(r)])
        return doc

    async def list_by_owner(self, owner_id: UUID) -> list[Document]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document d WHERE d.owner_id = %s "
            "ORDER BY d.created_at DESC, d.id",
            (owner_id,),
        )
        rows = await cur.fetchall()
        return await self._attach_shares([_row_to_document(r) for r in rows])

    async def list_shared_with(self, user_id: UUID) -> list[Document]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document d "
            "JOIN document_share s ON s.document_id = d.id "
            "WHERE s.user_id = %s "
            "ORDER BY d.created_at DESC, d.id",
            (user_id,),
        )
        rows = await cur.fetchall()
        return await self._attach_shares([_row_to_document(r) for r in rows])

    async def create(self, document: Document) -> Document:
        await self._conn.execute(
            "INSERT INTO document (id, title, description, document_type, file_url, "
            "storage_key, owner_id, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.title,
                document.description,
                document.document_type.value,
                document.content_ref.url,
                document.content_ref.storage_key,
                document.owner_id,
                document.created_at,
                document.updated_at,
            ),
        )
        return document

    async def update_fields(self, document: Document) -> Document:
        """Persist title, description and type. Owner and content are immutable."""
        await self._conn.execute(
            "UPDATE document SET title = %s, description = %s, document_type = %s, "
            "updated_at = %s WHERE id = %s",
            (
                document.title,
                document.description,
                document.document_type.value,
                document.updated_at,
                document.id,
            ),
        )
        return document

    async def touch(self, document_id: UUID, updated_at: datetime) -> None:
        await self._conn.execute(
            "UPDATE document SET updated_at = %s WHERE id = %s",
            (updated_at, document_id),
        )

    async def delete(self, document_id: UUID) -> bool:
        """Delete document; share rows go with it via ON DELETE CASCADE."""
        cur = await self._conn.execute("DELETE FROM document WHERE id = %s", (document_id,))
        return cur.rowcount > 0
