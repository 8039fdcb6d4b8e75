"""User repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from docshare.domain.entities import User
from docshare.domain.value_objects import PendingCode


class UserRepository(Protocol):
    """Port for account persistence (credential store)."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]: ...

    async def create(self, user: User) -> User:
        """Insert user. Raises EmailAlreadyRegistered on a duplicate e-mail."""
        ...

    async def set_pending_code(self, user_id: UUID, code: PendingCode) -> bool:
        """Overwrite any previous pending code (last write wins).

        Only unverified accounts are updated; returns False otherwise.
        """
        ...

    async def consume_pending_code(self, user_id: UUID, code_value: str) -> User | None:
        """Mark verified and clear the code iff it is still pending with this value.

        Returns the updated user, or None when the code was consumed or replaced
        concurrently.
        """
        ...

    async def update_name(self, user_id: UUID, name: str, updated_at: datetime) -> None: ...

    async def update_password_hash(
        self, user_id: UUID, password_hash: str, updated_at: datetime
    ) -> None: ...
