"""Domain entities."""

from docshare.domain.entities.document import ContentRef, Document, validate_metadata
from docshare.domain.entities.share import ShareEntry
from docshare.domain.entities.user import User, normalize_email

__all__ = [
    "ContentRef",
    "Document",
    "ShareEntry",
    "User",
    "normalize_email",
    "validate_metadata",
]
