"""OTP expiry sweeper for the registration backend."""

import asyncio
import logging

from app.services.OtpCodeStore import OtpCodeStore

logger = logging.getLogger(__name__)


async def otp_expiry_sweeper(code_store: OtpCodeStore, interval_seconds: float = 60):
    """
    Background task that drops expired codes every ``interval_seconds``.

    Runs until cancelled. A failing sweep is logged and the loop carries on.
    """
    logger.info(f"🧹 OTP expiry sweeper started (every {interval_seconds}s)")
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                code_store.sweep_expired()
            except Exception as e:
                logger.error(f"⚠️ OTP expiry sweep failed: {e}")
    except asyncio.CancelledError:
        logger.info("⏹️ OTP expiry sweeper stopped")
        raise
