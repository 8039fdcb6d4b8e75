"""Login use case."""

import logging

from docshare.application.dto.user_dto import AuthOutput, UserOutput
from docshare.application.ports import PasswordHasher, TokenService
from docshare.domain.entities import normalize_email
from docshare.domain.exceptions import AccountNotVerified, InvalidCredentials

logger = logging.getLogger(__name__)


class LoginUseCase:
    """Exchange e-mail and password for an access token."""

    def __init__(
        self,
        unit_of_work_factory: type,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher
        self._tokens = token_service

    async def execute(self, email: str, password: str) -> AuthOutput:
        """Raises InvalidCredentials or AccountNotVerified (both 401)."""
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user:
            logger.warning("Login attempt with non-existent email: %s", email)
            raise InvalidCredentials()
        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Login attempt with invalid password for user: %s", user.id)
            raise InvalidCredentials()
        if not user.is_verified:
            logger.warning("Login attempt for unverified user: %s", user.id)
            raise AccountNotVerified()

        logger.info("User logged in: %s", user.id)
        return AuthOutput(token=self._tokens.issue(user), user=UserOutput.from_user(user))
