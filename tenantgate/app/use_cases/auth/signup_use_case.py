"""
Signup Use Case

Creates a tenant workspace together with its owner.
"""

import logging
from typing import Optional

from tenantgate.app.services.email_content import build_link, verification_email
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.one_time_token_service import OneTimeTokenService
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import normalize_email
from tenantgate.domain.entities import (
    PlanKey,
    Tenant,
    TokenPurpose,
    User,
    UserRole,
    UserStatus,
)
from tenantgate.libs.result import Error, Result, Return

from .dtos import SignupResponse
from .passwords import hash_password, validate_password

logger = logging.getLogger(__name__)

VERIFY_PATH = "/verify-email"


class SignupUseCase:
    """
    Use case for signing up a new tenant.

    Business Rules:
    - Email must not already belong to any user row
    - Password must be at least 8 characters
    - Tenant starts on the free plan
    - The signing-up user becomes owner with status active
    - With an email sender, an email_verify token is issued and mailed
      best-effort after commit; without one the owner starts verified
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: Optional[IEmailSender] = None,
        base_url: str = "",
        verify_ttl_minutes: int = 60,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.base_url = base_url
        self.verify_ttl_minutes = verify_ttl_minutes

    async def execute(
        self, email: str, password: str, tenant_name: str
    ) -> Result[SignupResponse]:
        """
        Execute signup use case.

        Args:
            email: Owner email address
            password: Owner password
            tenant_name: Workspace name

        Returns:
            Result with SignupResponse, or Error
        """
        normalized_email = normalize_email(email)
        if not normalized_email:
            return Return.err(Error("INVALID_EMAIL", "Email is required"))

        password_validation = validate_password(password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        secret = None

        async with self.uow:
            existing = await self.uow.users.get_by_email(normalized_email)
            if existing:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account with this email already exists")
                )

            tenant = Tenant(name=tenant_name.strip(), plan=PlanKey.free.value)
            tenant = await self.uow.tenants.create(tenant)

            owner = User(
                tenant_id=tenant.id,
                email=normalized_email,
                password_hash=hash_password(password),
                role=UserRole.owner.value,
                status=UserStatus.active.value,
                email_verified=self.email_sender is None,
            )
            owner = await self.uow.users.create(owner)

            if self.email_sender is not None:
                tokens = OneTimeTokenService(self.uow)
                secret = await tokens.issue(
                    TokenPurpose.email_verify, normalized_email, self.verify_ttl_minutes
                )

            response = SignupResponse(
                tenant_id=str(tenant.id),
                user_id=str(owner.id),
                email=owner.email,
                plan=PlanKey.free.value,
                email_verified=owner.email_verified,
            )

            await self.uow.commit()

        if secret is not None:
            verify_url = build_link(self.base_url, VERIFY_PATH, secret)
            subject, html = verification_email(verify_url, self.verify_ttl_minutes)
            try:
                await self.email_sender.send(normalized_email, subject, html)
            except Exception:
                logger.exception("Verification email delivery failed")

        return Return.ok(response)
