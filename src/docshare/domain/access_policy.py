"""Resolution of a requester's capabilities on a document."""

from uuid import UUID

from docshare.domain.entities import Document
from docshare.domain.value_objects import NO_ACCESS, AccessLevel, Capabilities

_OWNER = Capabilities(
    can_view=True, can_edit_fields=True, can_manage_sharing=True, is_owner=True
)
_EDITOR = Capabilities(can_view=True, can_edit_fields=True)
_VIEWER = Capabilities(can_view=True)


def resolve_capabilities(document: Document, user_id: UUID) -> Capabilities:
    """Return what ``user_id`` may do with ``document``.

    This is the only place access levels are interpreted; registry mutators
    and sharing operations all go through it.
    """
    if document.owner_id == user_id:
        return _OWNER
    entry = document.share_for(user_id)
    if entry is None:
        return NO_ACCESS
    if entry.access_level == AccessLevel.EDIT:
        return _EDITOR
    return _VIEWER
