"""Share repository port - the ``shared_with`` list of a document."""

from typing import Protocol
from uuid import UUID

from docshare.domain.entities import ShareEntry
from docshare.domain.value_objects import AccessLevel


class ShareRepository(Protocol):
    """Port for share entries. (document_id, user_id) is unique."""

    async def add(self, document_id: UUID, entry: ShareEntry) -> bool:
        """Insert entry unless one exists for the user. Returns False on conflict."""
        ...

    async def update_access_level(
        self, document_id: UUID, user_id: UUID, access_level: AccessLevel
    ) -> bool:
        """Change access level in place. Returns False when no entry exists."""
        ...

    async def remove(self, document_id: UUID, user_id: UUID) -> bool:
        """Delete entry. Returns False when no entry exists."""
        ...
