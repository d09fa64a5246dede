"""
In-memory registry of live one-time codes.

One record per normalized email. Issuing again for the same email replaces
the previous code, a successful verification consumes it, and expired
records are dropped either on lookup or by the periodic sweep.
"""

import hmac
import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from app.constants.constants import OTP_MAX_VALUE, OTP_MIN_VALUE, OtpVerifyResult
from app.models.otp import OtpRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_key(email: str) -> str:
    """Emails are compared case-insensitively and without surrounding spaces."""
    return (email or "").strip().lower()


class OtpCodeStore:
    """Thread-safe map of email -> OtpRecord with a fixed time-to-live."""

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = utc_now,
    ):
        self.ttl = ttl
        self._clock = clock
        self._records: Dict[str, OtpRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @staticmethod
    def generate_code() -> str:
        """Uniformly random six-digit code in 100000..999999."""
        return str(OTP_MIN_VALUE + secrets.randbelow(OTP_MAX_VALUE - OTP_MIN_VALUE + 1))

    def issue(self, email: str) -> str:
        """Store a fresh code for ``email`` and return it for dispatch."""
        key = normalize_key(email)
        now = self._clock()
        record = OtpRecord(
            key=key,
            code=self.generate_code(),
            issued_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._records[key] = record
        return record.code

    def get(self, email: str) -> Optional[OtpRecord]:
        with self._lock:
            return self._records.get(normalize_key(email))

    def verify(self, email: str, candidate: str) -> OtpVerifyResult:
        """
        Check ``candidate`` against the live code for ``email``.

        Expired and successfully matched records are removed; a mismatch
        leaves the record in place so the registrant can try again.
        """
        key = normalize_key(email)
        now = self._clock()
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return OtpVerifyResult.not_found
            if record.is_expired(now):
                del self._records[key]
                return OtpVerifyResult.expired
            if not hmac.compare_digest(record.code, (candidate or "").strip()):
                return OtpVerifyResult.mismatch
            del self._records[key]
            return OtpVerifyResult.success

    def sweep_expired(self) -> int:
        """Drop every expired record. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, record in self._records.items() if record.is_expired(now)]
            for key in expired:
                del self._records[key]
        if expired:
            logger.info(f"🧹 Removed {len(expired)} expired OTP code(s)")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
