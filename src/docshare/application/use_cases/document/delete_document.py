"""Delete document use case."""

import logging
from uuid import UUID

from docshare.application.ports import ContentStore
from docshare.application.services.document_access import load_document
from docshare.domain.exceptions import PermissionDenied, StorageError

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Owner-only delete. The record goes first; the stored file is released after."""

    def __init__(self, unit_of_work_factory: type, content_store: ContentStore) -> None:
        self._uow_factory = unit_of_work_factory
        self._content_store = content_store

    async def execute(self, document_id: UUID, user_id: UUID) -> None:
        """Raises NotFound, PermissionDenied.

        Content-store release failures are logged and swallowed: an orphaned
        object is acceptable, a half-deleted record is not.
        """
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, user_id, for_update=True)
            if not caps.can_manage_sharing:
                logger.warning(
                    "Unauthorized document deletion attempt: %s by user: %s",
                    document_id,
                    user_id,
                )
                raise PermissionDenied("Not authorized to delete this document")
            await uow.documents.delete(document_id)

        logger.info("Document deleted: %s by user: %s", document_id, user_id)

        storage_key = document.content_ref.storage_key
        try:
            await self._content_store.delete(storage_key)
        except StorageError as e:
            logger.warning("Failed to release stored file %s: %s", storage_key, e)
        else:
            logger.info("Stored file released: %s", storage_key)
