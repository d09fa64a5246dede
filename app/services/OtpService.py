"""Issues and verifies the one-time codes that gate registration."""

import logging

from app.constants.constants import EMAIL_PATTERN, OTP_PATTERN, OtpVerifyResult
from app.core.exceptions import (
    InvalidAddressError,
    InvalidInputError,
    InvalidOrExpiredError,
    RateLimitedError,
)
from app.services.OtpCodeStore import OtpCodeStore, normalize_key
from app.services.OtpRateLimiter import OtpRateLimiter
from app.services.SendEmailOtp import send_email_otp

logger = logging.getLogger(__name__)


def is_valid_email(email: str) -> bool:
    return bool(email) and bool(EMAIL_PATTERN.match(email.strip()))


class OtpService:
    """
    Orchestrates code issuance (validate, rate-check, store, dispatch) and
    verification (validate, single-use check against the store).
    """

    def __init__(
        self,
        code_store: OtpCodeStore,
        rate_limiter: OtpRateLimiter,
        notifier,
        event_name: str = "VYOMANG",
    ):
        self.code_store = code_store
        self.rate_limiter = rate_limiter
        self.notifier = notifier
        self.event_name = event_name

    @property
    def ttl_minutes(self) -> int:
        return int(self.code_store.ttl.total_seconds() // 60)

    async def request_code(self, email: str, requester: str) -> None:
        """
        Issue a fresh code for ``email`` and send it there.

        The code is never returned. Raises InvalidAddressError,
        RateLimitedError or DispatchFailedError.
        """
        if not is_valid_email(email):
            raise InvalidAddressError()

        if not self.rate_limiter.consume(requester):
            raise RateLimitedError(retry_after=self.rate_limiter.retry_after(requester))

        key = normalize_key(email)
        code = self.code_store.issue(key)
        await send_email_otp(
            self.notifier,
            key,
            code,
            ttl_minutes=self.ttl_minutes,
            event_name=self.event_name,
        )
        logger.info(f"📨 OTP issued for {key}")

    async def verify_code(self, email: str, otp: str) -> None:
        """
        Consume the code for ``email`` if ``otp`` matches it.

        Unknown, expired and wrong codes all raise the same
        InvalidOrExpiredError.
        """
        otp = (otp or "").strip()
        if not is_valid_email(email) or not OTP_PATTERN.match(otp):
            raise InvalidInputError("Invalid email or OTP")

        result = self.code_store.verify(email, otp)
        if result is not OtpVerifyResult.success:
            logger.info(f"🔒 OTP verification failed for {normalize_key(email)}: {result.value}")
            raise InvalidOrExpiredError()

        logger.info(f"✅ OTP verified for {normalize_key(email)}")
