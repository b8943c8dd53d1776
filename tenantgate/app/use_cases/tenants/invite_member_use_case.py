"""
Invite Member Use Case

Handles inviting users to join a tenant with a given role.
"""

import logging
from datetime import timedelta

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.email_content import build_link, invitation_email
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.one_time_token_service import OneTimeTokenService
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import normalize_email, utc_now
from tenantgate.domain.entities import Invitation, TokenPurpose, UserRole, enum_text
from tenantgate.libs.result import Error, Result, Return

from .dtos import InviteMemberResponse
from .seats import check_seat_available

logger = logging.getLogger(__name__)

ACCEPT_PATH = "/accept-invite"


class InviteMemberUseCase:
    """
    Use case for inviting users to join a tenant.

    Business Rules:
    - Caller is an owner (enforced by the authorization gate)
    - Role must be admin or member; owners are not invited
    - Existing users of the tenant cannot be invited again
    - Member invites respect the plan's seat limit; pending member invites
      already hold a seat until they expire, are revoked or accepted
    - Re-inviting reuses the pending invitation and issues a new link,
      invalidating the previous one
    - Email delivery is best-effort after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        base_url: str,
        ttl_minutes: int = 60 * 24 * 7,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.base_url = base_url
        self.ttl_minutes = ttl_minutes

    async def execute(
        self, actor: Actor, email: str, role: str = UserRole.member.value
    ) -> Result[InviteMemberResponse]:
        """
        Execute invite member use case.

        Args:
            actor: Resolved owner sending the invite
            email: Email address to invite
            role: Role to assign (admin/member)

        Returns:
            Result with InviteMemberResponse DTO, or Error
        """
        try:
            invite_role = UserRole(enum_text(role))
        except ValueError:
            return Return.err(
                Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: admin, member")
            )
        if invite_role == UserRole.owner:
            return Return.err(Error("INVALID_ROLE", "Owners cannot be invited"))

        normalized_email = normalize_email(email)
        if not normalized_email:
            return Return.err(Error("INVALID_EMAIL", "Email is required"))

        async with self.uow:
            existing = await self.uow.users.get_by_tenant_and_email(
                actor.tenant_id, normalized_email
            )
            if existing is not None:
                return Return.err(
                    Error("ALREADY_MEMBER", "User is already a member of this tenant")
                )

            invitation = await self.uow.invitations.get_pending_by_tenant_and_email(
                actor.tenant_id, normalized_email
            )

            if invite_role == UserRole.member:
                seats = await check_seat_available(
                    self.uow,
                    actor.tenant_id,
                    actor.plan,
                    exclude_invitation_id=invitation.id if invitation else None,
                )
                if seats.is_err():
                    return Return.err(seats.error)

            tenant = await self.uow.tenants.get_by_id(actor.tenant_id)
            tenant_name = tenant.name if tenant is not None else "your team"

            expires_at = utc_now() + timedelta(minutes=self.ttl_minutes)
            if invitation is None:
                invitation = await self.uow.invitations.create(
                    Invitation(
                        tenant_id=actor.tenant_id,
                        email=normalized_email,
                        role=invite_role.value,
                        invited_by=actor.user_id,
                        expires_at=expires_at,
                    )
                )
            else:
                invitation.role = invite_role.value
                invitation.invited_by = actor.user_id
                invitation.expires_at = expires_at
                invitation = await self.uow.invitations.update(invitation)

            tokens = OneTimeTokenService(self.uow)
            secret = await tokens.issue(
                TokenPurpose.invite,
                Invitation.subject_key(actor.tenant_id, normalized_email),
                self.ttl_minutes,
            )

            response = InviteMemberResponse(
                invite_id=str(invitation.id),
                email=invitation.email,
                role=invitation.role,
                status=invitation.status.value,
            )

            await self.uow.commit()

        accept_url = build_link(self.base_url, ACCEPT_PATH, secret)
        subject, html = invitation_email(accept_url, tenant_name, invite_role.value)
        try:
            await self.email_sender.send(normalized_email, subject, html)
        except Exception:
            logger.exception("Invitation email delivery failed")

        return Return.ok(response)
