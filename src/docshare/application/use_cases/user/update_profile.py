"""Update profile use case."""

import logging
from datetime import UTC, datetime

from docshare.application.dto.user_dto import UserOutput
from docshare.domain.entities import User
from docshare.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """Change the requester's display name."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user: User, name: str) -> UserOutput:
        name = name.strip()
        if not name:
            raise ValidationError("Name is required")

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            await uow.users.update_name(user.id, name, now)

        user.name = name
        user.updated_at = now
        logger.info("User profile updated: %s", user.id)
        return UserOutput.from_user(user)
