"""Token service port - signed, time-bound access tokens."""

from typing import Protocol
from uuid import UUID

from docshare.domain.entities import User


class TokenService(Protocol):
    """Port for issuing and decoding stateless access tokens."""

    def issue(self, user: User) -> str: ...

    def decode(self, token: str) -> UUID:
        """Return the user id bound to ``token``. Raises InvalidToken."""
        ...
