"""Modify access use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.exceptions import NotShared, PermissionDenied
from docshare.domain.value_objects import AccessLevel

logger = logging.getLogger(__name__)


class ModifyAccessUseCase:
    """Change the access level of an existing share entry. Owner only."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        document_id: UUID,
        actor_id: UUID,
        target_user_id: UUID,
        access_level: AccessLevel,
    ) -> DocumentOutput:
        """Raises NotFound, PermissionDenied, NotShared."""
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, actor_id, for_update=True)
            if not caps.can_manage_sharing:
                logger.warning(
                    "Unauthorized sharing update attempt: %s by user: %s", document_id, actor_id
                )
                raise PermissionDenied("Not authorized to update sharing for this document")

            entry = document.share_for(target_user_id)
            if entry is None or not await uow.shares.update_access_level(
                document_id, target_user_id, access_level
            ):
                logger.warning("Document %s not shared with user: %s", document_id, target_user_id)
                raise NotShared(str(target_user_id))

            now = datetime.now(UTC)
            await uow.documents.touch(document_id, now)
            entry.access_level = access_level
            document.updated_at = now
            result = await to_output(uow, document, actor_id)

        logger.info(
            "Sharing updated: %s for user: %s -> %s", document_id, target_user_id, access_level
        )
        return result
