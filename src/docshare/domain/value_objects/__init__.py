"""Domain value objects."""

from docshare.domain.value_objects.access_level import AccessLevel
from docshare.domain.value_objects.capabilities import NO_ACCESS, Capabilities
from docshare.domain.value_objects.document_type import DocumentType
from docshare.domain.value_objects.pending_code import PendingCode

__all__ = [
    "NO_ACCESS",
    "AccessLevel",
    "Capabilities",
    "DocumentType",
    "PendingCode",
]
