"""Identity document categories accepted on upload."""

from enum import StrEnum


class DocumentType(StrEnum):
    """Supported document types (wire values are display names)."""

    AADHAAR = "Aadhaar"
    PAN = "PAN Card"
    PASSPORT = "Passport"
    DRIVING_LICENSE = "Driving License"
    VOTER_ID = "Voter ID"
    OTHER = "Other"
