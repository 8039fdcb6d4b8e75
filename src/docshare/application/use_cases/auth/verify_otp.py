"""Verify OTP use case."""

from docshare.application.dto.user_dto import AuthOutput, UserOutput
from docshare.application.ports import TokenService
from docshare.application.services.otp_manager import OtpManager


class VerifyOtpUseCase:
    """Activate account with its one-time code and sign the user in."""

    def __init__(self, otp_manager: OtpManager, token_service: TokenService) -> None:
        self._otp = otp_manager
        self._tokens = token_service

    async def execute(self, email: str, code: str) -> AuthOutput:
        user = await self._otp.verify(email, code)
        return AuthOutput(token=self._tokens.issue(user), user=UserOutput.from_user(user))
