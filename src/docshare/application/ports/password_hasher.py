"""Password hasher port - opaque credential verification."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for hashing and checking account passwords."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...
