"""Document repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from docshare.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence. Loaded documents include ``shared_with``."""

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None:
        """Get document. ``for_update`` locks the row until the unit of work ends."""
        ...

    async def list_by_owner(self, owner_id: UUID) -> list[Document]: ...

    async def list_shared_with(self, user_id: UUID) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update_fields(self, document: Document) -> Document: ...

    async def touch(self, document_id: UUID, updated_at: datetime) -> None: ...

    async def delete(self, document_id: UUID) -> bool: ...
