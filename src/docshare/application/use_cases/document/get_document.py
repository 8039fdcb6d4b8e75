"""Get document use case."""

import logging
from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


class GetDocumentUseCase:
    """Get document visible to the requester (owner or share target)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID, user_id: UUID) -> DocumentOutput:
        """Raises NotFound, PermissionDenied."""
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, user_id)
            if not caps.can_view:
                logger.warning(
                    "Unauthorized document access attempt: %s by user: %s", document_id, user_id
                )
                raise PermissionDenied("Not authorized to access this document")
            return await to_output(uow, document, user_id)
