"""Transactional email clients: Brevo over HTTP, and a console fallback for development."""

import logging
from typing import Optional

import httpx

from app.core.exceptions import DispatchFailedError

logger = logging.getLogger(__name__)


class BrevoEmailClient:
    """
    Client for sending transactional emails through the Brevo API.

    A failed send always raises ``DispatchFailedError``; the client never
    retries on its own, so callers decide whether the whole request is retried.
    """

    BASE_URL = "https://api.brevo.com/v3"

    def __init__(
        self,
        api_key: str,
        sender_email: str,
        sender_name: str = "VYOMANG",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.timeout = timeout
        self._transport = transport

    @property
    def backend(self) -> str:
        return "brevo"

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> dict:
        """
        Send a single email.

        Args:
            to: Recipient email address
            subject: Email subject
            html: HTML body content
            text: Optional plain-text alternative

        Returns:
            dict delivery receipt with the provider message id
        """
        if not self.api_key:
            raise DispatchFailedError("Email service is not configured")

        payload = {
            "sender": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": to}],
            "subject": subject,
            "htmlContent": html,
        }
        if text:
            payload["textContent"] = text

        headers = {
            "accept": "application/json",
            "api-key": self.api_key,
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.BASE_URL}/smtp/email", headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"❌ [Brevo] Request to send '{subject}' to {to} failed: {e}")
            raise DispatchFailedError() from e

        if response.status_code >= 300:
            logger.error(f"❌ [Brevo] Send failed ({response.status_code}): {response.text}")
            raise DispatchFailedError()

        message_id = None
        try:
            message_id = response.json().get("messageId")
        except ValueError:
            pass

        logger.info(f"✅ [Brevo] Email '{subject}' sent to {to}")
        return {"status": "sent", "message_id": message_id, "to": to, "subject": subject}


class ConsoleEmailClient:
    """Logs emails instead of sending them. Only wired up outside production."""

    @property
    def backend(self) -> str:
        return "console"

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> dict:
        logger.warning(f"📭 EMAIL WOULD BE SENT\nTo: {to}\nSubject: {subject}\nContent: {text or html}")
        return {"status": "logged-for-testing", "message_id": None, "to": to, "subject": subject}
