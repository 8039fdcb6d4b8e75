"""Pending one-time verification code."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PendingCode:
    """Numeric one-time code with its expiry (UTC)."""

    value: str
    expires_at: datetime

    def __post_init__(self) -> None:
        if not self.value.isdigit():
            raise ValueError("One-time code must be numeric")
        if self.expires_at.tzinfo is None:
            raise ValueError("expires_at must be timezone-aware")

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
