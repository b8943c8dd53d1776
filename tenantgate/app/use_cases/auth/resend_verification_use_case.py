"""
Resend Verification Use Case

Issues a fresh email verification link.
"""

import logging

from tenantgate.app.services.email_content import build_link, verification_email
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.one_time_token_service import OneTimeTokenService
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import normalize_email
from tenantgate.domain.entities import TokenPurpose
from tenantgate.libs.result import Result, Return

from .dtos import ResendVerificationResponse
from .signup_use_case import VERIFY_PATH

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """
    Use case for resending the verification email.

    Business Rules:
    - No email enumeration (same response for unknown or verified emails)
    - Only sent while some user row for the email is unverified
    - The new link invalidates any earlier one
    - Delivery failures are logged and never reported to the caller
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

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        response = ResendVerificationResponse(
            status="sent",
            message="If the email needs verification, a new link has been sent",
        )

        normalized_email = normalize_email(email)
        if not normalized_email:
            return Return.ok(response)

        async with self.uow:
            users = await self.uow.users.get_by_email(normalized_email)
            if all(user.email_verified for user in users):
                return Return.ok(response)

            tokens = OneTimeTokenService(self.uow)
            secret = await tokens.issue(
                TokenPurpose.email_verify, normalized_email, self.ttl_minutes
            )
            await self.uow.commit()

        verify_url = build_link(self.base_url, VERIFY_PATH, secret)
        subject, html = verification_email(verify_url, self.ttl_minutes)
        try:
            await self.email_sender.send(normalized_email, subject, html)
        except Exception:
            logger.exception("Verification email delivery failed")

        return Return.ok(response)
