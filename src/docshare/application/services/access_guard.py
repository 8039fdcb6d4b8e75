"""Access guard - resolves a bearer token to a live, verified user."""

import logging

from docshare.application.ports import TokenService
from docshare.domain.entities import User
from docshare.domain.exceptions import AccountNotVerified, MissingToken, UnknownUser

logger = logging.getLogger(__name__)


class AccessGuard:
    """Authenticates requests. Verification state is read live, not from the token."""

    def __init__(self, unit_of_work_factory: type, token_service: TokenService) -> None:
        self._uow_factory = unit_of_work_factory
        self._tokens = token_service

    async def authenticate(self, token: str | None) -> User:
        if not token:
            raise MissingToken()

        user_id = self._tokens.decode(token)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)

        if not user:
            logger.warning("User not found for token subject: %s", user_id)
            raise UnknownUser()
        if not user.is_verified:
            logger.warning("Unverified user attempting to access protected route: %s", user.id)
            raise AccountNotVerified("Please verify your email to access this route")
        return user
