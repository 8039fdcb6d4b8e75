"""Revoke access use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.exceptions import NotShared, PermissionDenied

logger = logging.getLogger(__name__)


class RevokeAccessUseCase:
    """Remove a user's share entry from a document. Owner only."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        document_id: UUID,
        actor_id: UUID,
        target_user_id: UUID,
    ) -> DocumentOutput:
        """Revoke share for target. Raises NotFound, PermissionDenied, NotShared."""
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, actor_id, for_update=True)
            if not caps.can_manage_sharing:
                logger.warning(
                    "Unauthorized sharing removal attempt: %s by user: %s", document_id, actor_id
                )
                raise PermissionDenied("Not authorized to remove sharing for this document")

            if document.share_for(target_user_id) is None or not await uow.shares.remove(
                document_id, target_user_id
            ):
                logger.warning("Document %s not shared with user: %s", document_id, target_user_id)
                raise NotShared(str(target_user_id))

            now = datetime.now(UTC)
            await uow.documents.touch(document_id, now)
            document.shared_with = [e for e in document.shared_with if e.user_id != target_user_id]
            document.updated_at = now
            result = await to_output(uow, document, actor_id)

        logger.info("Sharing removed: %s for user: %s", document_id, target_user_id)
        return result
