"""Fixed-window limiter for OTP issuance requests, keyed by requester address."""

import logging
import math
import time

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


class OtpRateLimiter:
    """
    Allows ``points`` issuance attempts per ``window_seconds`` for each identity.

    The window starts at an identity's first attempt and resets once it has
    elapsed; attempts beyond the budget inside the window are rejected.
    """

    NAMESPACE = "otp_send"

    def __init__(self, points: int = 5, window_seconds: int = 60):
        self.points = points
        self.window_seconds = window_seconds
        self._item = RateLimitItemPerSecond(points, window_seconds)
        self._storage = MemoryStorage()
        self._limiter = FixedWindowRateLimiter(self._storage)

    def consume(self, identity: str) -> bool:
        """Spend one point for ``identity``. Returns False when the budget is exhausted."""
        allowed = self._limiter.hit(self._item, self.NAMESPACE, identity or "0.0.0.0")
        if not allowed:
            logger.warning(f"⛔ OTP rate limit reached for {identity}")
        return allowed

    def retry_after(self, identity: str) -> int:
        """Seconds until the current window for ``identity`` resets."""
        stats = self._limiter.get_window_stats(self._item, self.NAMESPACE, identity or "0.0.0.0")
        return max(math.ceil(stats.reset_time - time.time()), 0)

    def remaining(self, identity: str) -> int:
        stats = self._limiter.get_window_stats(self._item, self.NAMESPACE, identity or "0.0.0.0")
        return stats.remaining

    def reset(self) -> None:
        self._storage.reset()
