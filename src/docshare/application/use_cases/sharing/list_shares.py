"""List shares use case."""

import logging
from uuid import UUID

from docshare.application.dto.document_dto import ShareOutput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


class ListSharesUseCase:
    """Share list of a document, visible to the owner and every current share target."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID, requester_id: UUID) -> list[ShareOutput]:
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, requester_id)
            if not caps.can_view:
                logger.warning(
                    "User %s attempted to list shares of document %s", requester_id, document_id
                )
                raise PermissionDenied("Not authorized to view this document")
            output = await to_output(uow, document, requester_id)
        return output.shared_with
