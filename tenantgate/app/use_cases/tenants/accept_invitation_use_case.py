"""
Accept Invitation Use Case

Handles accepting tenant invitations with single-use invite tokens.
"""

from uuid import UUID

from tenantgate.app.services.one_time_token_service import (
    INVALID_OR_EXPIRED,
    OneTimeTokenService,
)
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.app.use_cases.auth.passwords import hash_password, validate_password
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import (
    InvitationStatus,
    TokenPurpose,
    User,
    UserRole,
    UserStatus,
    normalize_role,
    normalize_status,
)
from tenantgate.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse
from .seats import check_seat_available


class AcceptInvitationUseCase:
    """
    Use case for accepting tenant invitations.

    Business Rules:
    - Token must be valid, unexpired and unused (INVALID_OR_EXPIRED)
    - The invitation must still be pending (revoked ones fail the same way)
    - Member invites re-check the plan's seat limit; the seat may have been
      taken since the invite was sent (plan downgrade, re-activated members)
    - The user row is created (or updated) active with the invited role;
      following the emailed link also verifies the email
    - Token consumption, user write and invitation update commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, password: str) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Invitation token from the email link
            password: Password to set for the account

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
        password_validation = validate_password(password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        invalid = Return.err(Error(INVALID_OR_EXPIRED, "Invalid or expired invitation"))

        async with self.uow:
            tokens = OneTimeTokenService(self.uow)
            consumed = await tokens.consume(TokenPurpose.invite, token)
            if consumed.is_err():
                return Return.err(consumed.error)

            raw_tenant_id, _, email = consumed.value.partition(":")
            try:
                tenant_id = UUID(raw_tenant_id)
            except ValueError:
                return invalid

            invitation = await self.uow.invitations.get_pending_by_tenant_and_email(
                tenant_id, email
            )
            if invitation is None:
                return invalid

            role = normalize_role(invitation.role)
            user = await self.uow.users.get_by_tenant_and_email(tenant_id, email)

            held_seat = (
                user is not None
                and normalize_role(user.role) == UserRole.member
                and normalize_status(user.status) != UserStatus.blocked
            )
            if role == UserRole.member and not held_seat:
                tenant = await self.uow.tenants.get_by_id(tenant_id)
                seats = await check_seat_available(
                    self.uow,
                    tenant_id,
                    tenant.plan if tenant is not None else None,
                    count_invitations=False,
                )
                if seats.is_err():
                    return Return.err(seats.error)

            if user is None:
                user = await self.uow.users.create(
                    User(
                        tenant_id=tenant_id,
                        email=email,
                        password_hash=hash_password(password),
                        role=role.value,
                        status=UserStatus.active.value,
                        email_verified=True,
                    )
                )
            else:
                user.password_hash = hash_password(password)
                user.role = role.value
                user.status = UserStatus.active.value
                user.email_verified = True
                user = await self.uow.users.update(user)

            invitation.status = InvitationStatus.accepted
            invitation.accepted_at = utc_now()
            await self.uow.invitations.update(invitation)

            response = AcceptInvitationResponse(
                tenant_id=str(tenant_id), email=user.email, role=role.value
            )

            await self.uow.commit()

        return Return.ok(response)
