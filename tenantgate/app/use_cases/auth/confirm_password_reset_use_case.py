"""
Confirm Password Reset Use Case

Handles password reset confirmation with single-use token consumption.
"""

from tenantgate.app.services.one_time_token_service import (
    INVALID_OR_EXPIRED,
    OneTimeTokenService,
)
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.entities import TokenPurpose
from tenantgate.libs.result import Error, Result, Return

from .dtos import ConfirmPasswordResetResponse
from .passwords import hash_password, validate_password


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token must exist, be unexpired and unconsumed (INVALID_OR_EXPIRED)
    - New password must be at least 8 characters
    - Password update and token consumption are committed together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_OR_EXPIRED: Token unknown, expired or already used
            - INVALID_PASSWORD: Password does not meet requirements
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        password_hash = hash_password(new_password)

        async with self.uow:
            tokens = OneTimeTokenService(self.uow)
            consumed = await tokens.consume(TokenPurpose.password_reset, token)
            if consumed.is_err():
                return Return.err(consumed.error)

            updated = await self.uow.users.update_password_by_email(
                consumed.value, password_hash
            )
            if updated == 0:
                # Account removed after the token was issued; leave the token as is
                return Return.err(Error(INVALID_OR_EXPIRED, "Invalid or expired token"))

            await self.uow.commit()

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
