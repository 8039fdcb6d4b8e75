"""Document and share DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from docshare.application.dto.user_dto import UserSummary
from docshare.domain.value_objects import AccessLevel, DocumentType


@dataclass
class DocumentCreateInput:
    """Input for uploading a document."""

    title: str
    description: str
    document_type: DocumentType
    filename: str
    content: bytes
    content_type: str | None = None


@dataclass
class DocumentUpdateInput:
    """Partial update of document fields. ``None`` leaves a field unchanged."""

    title: str | None = None
    description: str | None = None
    document_type: DocumentType | None = None

    def is_empty(self) -> bool:
        return self.title is None and self.description is None and self.document_type is None


@dataclass
class ShareOutput:
    """Share entry with the target resolved to a summary."""

    user: UserSummary
    access_level: AccessLevel
    shared_at: datetime


@dataclass
class DocumentOutput:
    """Output DTO for document, annotated for the requester."""

    id: UUID
    title: str
    description: str
    document_type: DocumentType
    file_url: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    is_owner: bool
    owner: UserSummary | None = None
    shared_with: list[ShareOutput] = field(default_factory=list)
