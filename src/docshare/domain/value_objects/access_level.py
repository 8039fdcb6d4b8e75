"""Access level granted by a share entry."""

from enum import StrEnum


class AccessLevel(StrEnum):
    """Permission tier on a shared document."""

    VIEW = "view"
    EDIT = "edit"
