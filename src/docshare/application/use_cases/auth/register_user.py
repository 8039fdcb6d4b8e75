"""Register user use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from docshare.application.dto.user_dto import RegisterInput, UserOutput
from docshare.application.ports import Notifier, PasswordHasher
from docshare.application.services.otp_manager import OtpManager
from docshare.domain.entities import User, normalize_email
from docshare.domain.exceptions import EmailAlreadyRegistered, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class RegisterUserUseCase:
    """Create an unverified account and send it a one-time code."""

    def __init__(
        self,
        unit_of_work_factory: type,
        password_hasher: PasswordHasher,
        otp_manager: OtpManager,
        notifier: Notifier,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher
        self._otp = otp_manager
        self._notifier = notifier

    async def execute(self, input_data: RegisterInput) -> UserOutput:
        """Register account. Raises EmailAlreadyRegistered, NotificationError."""
        name = input_data.name.strip()
        email = normalize_email(input_data.email)
        if not name:
            raise ValidationError("Name is required")
        if len(input_data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                logger.warning("Registration attempt with existing email: %s", email)
                raise EmailAlreadyRegistered()

            now = datetime.now(UTC)
            user = User(
                id=uuid4(),
                name=name,
                email=email,
                password_hash=self._hasher.hash(input_data.password),
                created_at=now,
                updated_at=now,
            )
            await uow.users.create(user)

        code = await self._otp.generate(user)
        await self._notifier.send_otp(user.email, user.name, code, self._otp.ttl_minutes)

        logger.info("New user registered: %s", user.id)
        return UserOutput.from_user(user)
