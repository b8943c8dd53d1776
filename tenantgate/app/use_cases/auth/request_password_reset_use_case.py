"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging

from tenantgate.app.services.email_content import build_link, password_reset_email
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.one_time_token_service import OneTimeTokenService
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import normalize_email
from tenantgate.domain.entities import TokenPurpose
from tenantgate.libs.result import Result, Return

from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_PATH = "/reset-password"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token subject is the normalized email (covers every tenant row)
    - A new request overwrites any earlier unconsumed reset token
    - No email enumeration (same response for valid/invalid emails)
    - Token is committed before the email is sent; delivery failures
      are logged and never reported to the caller
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        base_url: str,
        ttl_minutes: int = 60,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.base_url = base_url
        self.ttl_minutes = ttl_minutes

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status (always "sent")
        """
        response = RequestPasswordResetResponse(
            status="sent",
            message="If the email exists, a password reset link has been sent",
        )

        normalized_email = normalize_email(email)
        if not normalized_email:
            return Return.ok(response)

        async with self.uow:
            users = await self.uow.users.get_by_email(normalized_email)
            if not users:
                return Return.ok(response)

            tokens = OneTimeTokenService(self.uow)
            secret = await tokens.issue(
                TokenPurpose.password_reset, normalized_email, self.ttl_minutes
            )
            await self.uow.commit()

        reset_url = build_link(self.base_url, RESET_PATH, secret)
        subject, html = password_reset_email(reset_url, self.ttl_minutes)
        try:
            await self.email_sender.send(normalized_email, subject, html)
        except Exception:
            logger.exception("Password reset email delivery failed")

        return Return.ok(response)
