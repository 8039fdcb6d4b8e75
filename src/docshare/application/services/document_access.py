"""Shared helpers for loading documents under authorization and shaping output."""

from uuid import UUID

from docshare.application.dto.document_dto import DocumentOutput, ShareOutput
from docshare.application.dto.user_dto import UserSummary
from docshare.domain.access_policy import resolve_capabilities
from docshare.domain.entities import Document, User
from docshare.domain.exceptions import NotFound
from docshare.domain.value_objects import Capabilities


async def load_document(
    uow, document_id: UUID, user_id: UUID, *, for_update: bool = False
) -> tuple[Document, Capabilities]:
    """Load document and the requester's capabilities. Raises NotFound."""
    document = await uow.documents.get_by_id(document_id, for_update=for_update)
    if not document:
        raise NotFound("Document", str(document_id))
    return document, resolve_capabilities(document, user_id)


def _output(document: Document, requester_id: UUID, users: dict[UUID, User]) -> DocumentOutput:
    owner = users.get(document.owner_id)
    shares = [
        ShareOutput(
            user=UserSummary.from_user(users[entry.user_id]),
            access_level=entry.access_level,
            shared_at=entry.shared_at,
        )
        for entry in document.shared_with
        if entry.user_id in users
    ]
    return DocumentOutput(
        id=document.id,
        title=document.title,
        description=document.description,
        document_type=document.document_type,
        file_url=document.content_ref.url,
        owner_id=document.owner_id,
        created_at=document.created_at,
        updated_at=document.updated_at,
        is_owner=resolve_capabilities(document, requester_id).is_owner,
        owner=UserSummary.from_user(owner) if owner else None,
        shared_with=shares,
    )


async def to_outputs(uow, documents: list[Document], requester_id: UUID) -> list[DocumentOutput]:
    """Build outputs, resolving owners and share targets with one user lookup."""
    user_ids = {d.owner_id for d in documents}
    for d in documents:
        user_ids.update(entry.user_id for entry in d.shared_with)
    users = await uow.users.get_many(list(user_ids)) if user_ids else {}
    return [_output(d, requester_id, users) for d in documents]


async def to_output(uow, document: Document, requester_id: UUID) -> DocumentOutput:
    outputs = await to_outputs(uow, [document], requester_id)
    return outputs[0]
