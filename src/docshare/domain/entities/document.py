"""Document entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from docshare.domain.entities.share import ShareEntry
from docshare.domain.exceptions import ValidationError
from docshare.domain.value_objects import DocumentType


@dataclass(frozen=True)
class ContentRef:
    """Location of the stored file: public URL plus the store's deletion handle."""

    url: str
    storage_key: str


@dataclass
class Document:
    """Uploaded document owned by one user, shared with others via ``shared_with``."""

    id: UUID
    title: str
    description: str
    document_type: DocumentType
    content_ref: ContentRef
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    shared_with: list[ShareEntry] = field(default_factory=list)

    def share_for(self, user_id: UUID) -> ShareEntry | None:
        for entry in self.shared_with:
            if entry.user_id == user_id:
                return entry
        return None


TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def validate_metadata(title: str | None, description: str | None) -> None:
    """Check title/description limits. ``None`` means the field is not being set."""
    if title is not None:
        if not title.strip():
            raise ValidationError("Title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title cannot be more than {TITLE_MAX_LENGTH} characters")
    if description is not None:
        if not description.strip():
            raise ValidationError("Description is required")
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters"
            )
