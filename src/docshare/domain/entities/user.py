"""User entity - registered account."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from docshare.domain.value_objects import PendingCode


@dataclass
class User:
    """Account with credential hash, verification flag and pending one-time code."""

    id: UUID
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    is_verified: bool = False
    pending_code: PendingCode | None = None


def normalize_email(email: str) -> str:
    """E-mail addresses are unique case-insensitively; store them lower-cased."""
    return email.strip().lower()
