"""Grant access use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.entities import ShareEntry, normalize_email
from docshare.domain.exceptions import (
    AlreadyShared,
    PermissionDenied,
    SelfShare,
    TargetNotFound,
)
from docshare.domain.value_objects import AccessLevel

logger = logging.getLogger(__name__)


class GrantAccessUseCase:
    """Share document with another registered user. Owner only."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        document_id: UUID,
        actor_id: UUID,
        target_email: str,
        access_level: AccessLevel,
    ) -> DocumentOutput:
        """Append a share entry and return the refreshed document.

        An existing entry is never upgraded here; callers must use ModifyAccessUseCase.
        """
        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, actor_id, for_update=True)
            if not caps.can_manage_sharing:
                logger.warning(
                    "Unauthorized document sharing attempt: %s by user: %s", document_id, actor_id
                )
                raise PermissionDenied("Not authorized to share this document")

            email = normalize_email(target_email)
            target = await uow.users.get_by_email(email)
            if not target:
                logger.warning("Share attempt with non-existent email: %s", email)
                raise TargetNotFound(email)
            if target.id == actor_id:
                raise SelfShare()

            now = datetime.now(UTC)
            entry = ShareEntry(user_id=target.id, access_level=access_level, shared_at=now)
            if document.share_for(target.id) or not await uow.shares.add(document_id, entry):
                logger.warning("Document %s already shared with user: %s", document_id, target.id)
                raise AlreadyShared()
            await uow.documents.touch(document_id, now)

            document.shared_with.append(entry)
            document.updated_at = now
            result = await to_output(uow, document, actor_id)

        logger.info("Document shared: %s with user: %s", document_id, target.id)
        return result
