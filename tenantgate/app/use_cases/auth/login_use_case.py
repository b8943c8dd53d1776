"""
Login Use Case

Verifies credentials and returns the identity to sign into a session.
"""

import logging
from typing import Optional
from uuid import UUID

from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import normalize_email
from tenantgate.libs.result import Error, Result, Return

from .dtos import LoginResponse
from .passwords import verify_password

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Same INVALID_CREDENTIALS error for unknown email and wrong password
    - An email may exist in several tenants; tenant_id picks one,
      otherwise the oldest matching row wins
    - Status is not checked here: pending or blocked users get a session
      but are denied by the authorization gate on every request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, password: str, tenant_id: Optional[UUID] = None
    ) -> Result[LoginResponse]:
        invalid = Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        normalized_email = normalize_email(email)
        if not normalized_email or not password:
            return invalid

        async with self.uow:
            candidates = await self.uow.users.get_by_email(normalized_email)
            if tenant_id is not None:
                candidates = [u for u in candidates if u.tenant_id == tenant_id]

            for user in candidates:
                if verify_password(password, user.password_hash):
                    return Return.ok(
                        LoginResponse(tenant_id=str(user.tenant_id), email=user.email)
                    )

        logger.info("Login failed: invalid credentials")
        return invalid
