"""Repository ports."""

from docshare.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from docshare.application.ports.repositories.share_repository import ShareRepository
from docshare.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "DocumentRepository",
    "ShareRepository",
    "UserRepository",
]
