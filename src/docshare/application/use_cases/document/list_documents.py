"""List documents use case."""

from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput
from docshare.application.services.document_access import to_outputs


class ListDocumentsUseCase:
    """Documents the requester owns, or that are shared with them."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def owned(self, user_id: UUID) -> list[DocumentOutput]:
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_by_owner(user_id)
            return await to_outputs(uow, documents, user_id)

    async def shared_with_me(self, user_id: UUID) -> list[DocumentOutput]:
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_shared_with(user_id)
            return await to_outputs(uow, documents, user_id)
