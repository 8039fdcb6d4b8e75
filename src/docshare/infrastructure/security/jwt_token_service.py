"""JWT access tokens (HS256 by default)."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from docshare.domain.entities import User
from docshare.domain.exceptions import AccountNotVerified, InvalidToken, TokenExpired

TOKEN_TYPE = "access"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService:
    """Issues and decodes signed access tokens bound to a user id.

    Claims: ``sub`` (user id), ``iat``, ``exp`` and ``typ``. Nothing else about
    the account is embedded.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)
        self._clock = clock

    def issue(self, user: User) -> str:
        if not user.is_verified:
            raise AccountNotVerified()
        now = self._clock()
        payload = {
            "sub": str(user.id),
            "iat": now,
            "exp": now + self._expire,
            "typ": TOKEN_TYPE,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> UUID:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired() from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken() from e
        if payload.get("typ") != TOKEN_TYPE:
            raise InvalidToken()
        try:
            return UUID(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidToken() from e
