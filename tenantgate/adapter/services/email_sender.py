"""
Email Sender Adapters

Resend HTTP API sender for deployments, logging sender for development.
"""

import logging
from typing import Optional

import httpx

from tenantgate.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailSender(IEmailSender):
    """Sends mail through the Resend REST API"""

    def __init__(
        self,
        api_key: str,
        sender: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        if not api_key:
            raise ValueError("RESEND_API_KEY is required for the resend email backend")
        if not sender:
            raise ValueError("EMAIL_FROM is required for the resend email backend")
        self.api_key = api_key
        self.sender = sender
        self.client = client
        self.timeout = timeout

    async def send(self, to: str, subject: str, html: str) -> None:
        recipient = (to or "").strip()
        if not recipient:
            raise ValueError("send: missing recipient")

        payload = {
            "from": self.sender,
            "to": [recipient],
            "subject": subject,
            "html": html,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self.client is not None:
            response = await self.client.post(RESEND_API_URL, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(RESEND_API_URL, json=payload, headers=headers)

        response.raise_for_status()
        logger.info(f"Email sent: subject={subject!r}")


class LoggingEmailSender(IEmailSender):
    """Writes messages to the log instead of delivering them"""

    async def send(self, to: str, subject: str, html: str) -> None:
        logger.info(f"Email (not delivered) to={to} subject={subject!r}\n{html}")
