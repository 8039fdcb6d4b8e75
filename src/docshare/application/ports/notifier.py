"""Notifier port - out-of-band delivery of one-time codes."""

from typing import Protocol


class Notifier(Protocol):
    """Port for sending verification codes. Failures raise NotificationError."""

    async def send_otp(self, email: str, name: str, code: str, ttl_minutes: int) -> None: ...
