"""Change password use case."""

import logging
from datetime import UTC, datetime

from docshare.application.ports import PasswordHasher
from docshare.application.use_cases.auth.register_user import MIN_PASSWORD_LENGTH
from docshare.domain.entities import User
from docshare.domain.exceptions import InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """Replace the requester's password after checking the current one."""

    def __init__(self, unit_of_work_factory: type, password_hasher: PasswordHasher) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher

    async def execute(self, user: User, current_password: str, new_password: str) -> None:
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if not self._hasher.verify(current_password, user.password_hash):
            logger.warning("Invalid current password for user: %s", user.id)
            raise InvalidCredentials("Current password is incorrect")
        if self._hasher.verify(new_password, user.password_hash):
            raise ValidationError("New password must be different from current password")

        password_hash = self._hasher.hash(new_password)
        async with self._uow_factory() as uow:
            await uow.users.update_password_hash(user.id, password_hash, datetime.now(UTC))

        user.password_hash = password_hash
        logger.info("Password updated for user: %s", user.id)
