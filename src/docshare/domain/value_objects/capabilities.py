"""Capability set a user holds on a single document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Capabilities:
    """What a requester may do with a document.

    ``can_manage_sharing`` is owner-only: an ``edit`` share allows changing
    document fields but never the share list.
    """

    can_view: bool = False
    can_edit_fields: bool = False
    can_manage_sharing: bool = False
    is_owner: bool = False


NO_ACCESS = Capabilities()
