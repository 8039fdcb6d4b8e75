"""Resend OTP use case."""

import logging

from docshare.application.ports import Notifier
from docshare.application.services.otp_manager import OtpManager

logger = logging.getLogger(__name__)


class ResendOtpUseCase:
    """Issue a replacement code and deliver it."""

    def __init__(self, otp_manager: OtpManager, notifier: Notifier) -> None:
        self._otp = otp_manager
        self._notifier = notifier

    async def execute(self, email: str) -> None:
        """Raises AccountNotFound, AlreadyVerified, NotificationError.

        The new code is committed before delivery, so a NotificationError
        still leaves the previous code invalidated.
        """
        user, code = await self._otp.resend(email)
        await self._notifier.send_otp(user.email, user.name, code, self._otp.ttl_minutes)
        logger.info("OTP resent to user: %s", user.id)
