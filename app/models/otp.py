from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OtpRecord:
    """A live one-time code for a single normalized email."""

    key: str
    code: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
