"""One-time code lifecycle: generate, verify, resend."""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from docshare.domain.entities import User, normalize_email
from docshare.domain.exceptions import (
    AccountNotFound,
    AlreadyVerified,
    NoPendingCode,
    OtpExpired,
    OtpMismatch,
)
from docshare.domain.value_objects import PendingCode

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class OtpManager:
    """Issues single-use numeric codes and gates account activation on them.

    Delivering the code is the caller's job; this class only changes state.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        code_length: int = 6,
        ttl_minutes: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if code_length < 4:
            raise ValueError("code_length must be at least 4")
        self._uow_factory = unit_of_work_factory
        self._code_length = code_length
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    @property
    def ttl_minutes(self) -> int:
        return int(self._ttl.total_seconds() // 60)

    def _new_code(self) -> str:
        return "".join(secrets.choice("0123456789") for _ in range(self._code_length))

    async def generate(self, user: User) -> str:
        """Replace the user's pending code with a fresh one and return it.

        Raises AlreadyVerified if the account was verified in the meantime.
        """
        code = PendingCode(value=self._new_code(), expires_at=self._clock() + self._ttl)
        async with self._uow_factory() as uow:
            if not await uow.users.set_pending_code(user.id, code):
                logger.info("Skipped code for already verified user %s", user.id)
                raise AlreadyVerified()
        user.pending_code = code
        logger.info("Generated one-time code for user %s", user.id)
        return code.value

    async def verify(self, email: str, submitted_code: str) -> User:
        """Consume the pending code and mark the account verified."""
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)
            if not user:
                logger.warning("OTP verification for unknown email: %s", email)
                raise AccountNotFound(email)
            if user.is_verified:
                logger.info("OTP verification for already verified user %s", user.id)
                raise AlreadyVerified()
            pending = user.pending_code
            if pending is None:
                logger.warning("OTP verification without pending code: %s", user.id)
                raise NoPendingCode()
            if pending.is_expired(self._clock()):
                logger.warning("OTP verification with expired code: %s", user.id)
                raise OtpExpired()
            if not secrets.compare_digest(
                pending.value.encode(), submitted_code.strip().encode()
            ):
                logger.warning("OTP verification with invalid code: %s", user.id)
                raise OtpMismatch()

            verified = await uow.users.consume_pending_code(user.id, pending.value)
            if verified is None:
                # consumed or replaced by a concurrent request
                raise NoPendingCode()

        logger.info("User email verified: %s", verified.id)
        return verified

    async def resend(self, email: str) -> tuple[User, str]:
        """Issue a new code for an unverified account, invalidating the old one."""
        email = normalize_email(email)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)
        if not user:
            logger.warning("Resend OTP for unknown email: %s", email)
            raise AccountNotFound(email)
        if user.is_verified:
            logger.info("Resend OTP for already verified user %s", user.id)
            raise AlreadyVerified()
        code = await self.generate(user)
        return user, code
