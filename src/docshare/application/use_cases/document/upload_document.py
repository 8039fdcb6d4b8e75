"""Upload document use case."""

import logging
from datetime import UTC, datetime
from pathlib import PurePath
from uuid import uuid4

from docshare.application.dto.document_dto import DocumentCreateInput, DocumentOutput
from docshare.application.ports import ContentStore
from docshare.application.services.document_access import to_output
from docshare.domain.entities import Document, User, validate_metadata
from docshare.domain.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"})
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class UploadDocumentUseCase:
    """Store file in the content store, then register the document."""

    def __init__(self, unit_of_work_factory: type, content_store: ContentStore) -> None:
        self._uow_factory = unit_of_work_factory
        self._content_store = content_store

    async def execute(self, owner: User, input_data: DocumentCreateInput) -> DocumentOutput:
        """Upload and create document owned by ``owner``.

        A content-store failure raises StorageError and no record is created.
        """
        validate_metadata(input_data.title, input_data.description)
        if not input_data.content:
            raise ValidationError("Please upload a file")
        if len(input_data.content) > MAX_UPLOAD_BYTES:
            raise ValidationError("File too large. Maximum size is 10MB")
        extension = PurePath(input_data.filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                "File type not supported. Allowed types: "
                + ", ".join(sorted(ALLOWED_EXTENSIONS))
            )

        content_ref = await self._content_store.upload(
            input_data.content, input_data.filename, input_data.content_type
        )
        logger.info("File stored: %s", content_ref.storage_key)

        now = datetime.now(UTC)
        document = Document(
            id=uuid4(),
            title=input_data.title.strip(),
            description=input_data.description,
            document_type=input_data.document_type,
            content_ref=content_ref,
            owner_id=owner.id,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.documents.create(document)
                result = await to_output(uow, document, owner.id)
        except BaseException:
            await self._release(content_ref.storage_key)
            raise

        logger.info("New document created: %s by user: %s", document.id, owner.id)
        return result

    async def _release(self, storage_key: str) -> None:
        try:
            await self._content_store.delete(storage_key)
        except StorageError:
            logger.warning("Failed to release orphaned upload: %s", storage_key)
