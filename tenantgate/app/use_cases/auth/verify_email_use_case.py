"""
Verify Email Use Case

Handles email verification via single-use token.
"""

from tenantgate.app.services.one_time_token_service import (
    INVALID_OR_EXPIRED,
    OneTimeTokenService,
)
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.entities import TokenPurpose
from tenantgate.libs.result import Error, Result, Return

from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must exist, be unexpired and unconsumed (INVALID_OR_EXPIRED)
    - Token subject is the normalized email; every user row for it is
      flagged verified
    - Verification does not change role or status
    - Token consumption and the flag update commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error INVALID_OR_EXPIRED
        """
        async with self.uow:
            tokens = OneTimeTokenService(self.uow)
            consumed = await tokens.consume(TokenPurpose.email_verify, token)
            if consumed.is_err():
                return Return.err(consumed.error)

            updated = await self.uow.users.mark_email_verified_by_email(consumed.value)
            if updated == 0:
                return Return.err(Error(INVALID_OR_EXPIRED, "Invalid or expired token"))

            await self.uow.commit()

        return Return.ok(
            VerifyEmailResponse(status="verified", message="Email successfully verified")
        )
