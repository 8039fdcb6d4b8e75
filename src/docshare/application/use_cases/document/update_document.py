"""Update document use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput, DocumentUpdateInput
from docshare.application.services.document_access import load_document, to_output
from docshare.domain.entities import validate_metadata
from docshare.domain.exceptions import PermissionDenied, ValidationError

logger = logging.getLogger(__name__)


class UpdateDocumentUseCase:
    """Change title, description or type. Allowed for the owner and edit sharers."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, document_id: UUID, user_id: UUID, changes: DocumentUpdateInput
    ) -> DocumentOutput:
        """Raises ValidationError, NotFound, PermissionDenied."""
        if changes.is_empty():
            raise ValidationError("No fields to update")
        validate_metadata(changes.title, changes.description)

        async with self._uow_factory() as uow:
            document, caps = await load_document(uow, document_id, user_id, for_update=True)
            if not caps.can_edit_fields:
                logger.warning(
                    "Unauthorized document update attempt: %s by user: %s", document_id, user_id
                )
                raise PermissionDenied("Not authorized to update this document")

            updated = replace(
                document,
                title=changes.title.strip() if changes.title is not None else document.title,
                description=(
                    changes.description
                    if changes.description is not None
                    else document.description
                ),
                document_type=changes.document_type or document.document_type,
                updated_at=datetime.now(UTC),
            )
            await uow.documents.update_fields(updated)
            result = await to_output(uow, updated, user_id)

        logger.info("Document updated: %s by user: %s", document_id, user_id)
        return result
