"""Share entry - a non-owner user's access to a document."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from docshare.domain.value_objects import AccessLevel


@dataclass
class ShareEntry:
    """Grant of ``access_level`` on the owning document to ``user_id``."""

    user_id: UUID
    access_level: AccessLevel
    shared_at: datetime
