"""Account DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from docshare.domain.entities import User


@dataclass
class RegisterInput:
    """Input for registering an account."""

    name: str
    email: str
    password: str


@dataclass
class UserSummary:
    """Display-safe view of another user (never credentials or codes)."""

    id: UUID
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, name=user.name, email=user.email)


@dataclass
class UserOutput:
    """Output DTO for the requester's own account."""

    id: UUID
    name: str
    email: str
    is_verified: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserOutput":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            is_verified=user.is_verified,
            created_at=user.created_at,
        )


@dataclass
class AuthOutput:
    """Access token plus the account it was issued for."""

    token: str
    user: UserOutput
