"""
Revoke Invitation Use Case

Handles revoking pending invitations.
"""

from uuid import UUID

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.one_time_token_service import OneTimeTokenService
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import Invitation, InvitationStatus, TokenPurpose
from tenantgate.libs.result import Error, Result, Return

from .dtos import RevokeInvitationResponse


class RevokeInvitationUseCase:
    """
    Use case for revoking pending invitations.

    Business Rules:
    - Caller is an owner (enforced by the authorization gate)
    - Invitation must belong to the caller's tenant (INVITATION_NOT_FOUND)
    - Accepted invitations cannot be revoked (INVITATION_ALREADY_ACCEPTED)
    - Revoking clears the emailed link and frees the reserved seat
    - Revoking an already revoked invitation succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: Actor, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        """
        Execute revoke invitation use case.

        Args:
            actor: Resolved owner revoking the invite
            invitation_id: ID of the invitation to revoke

        Returns:
            Result with RevokeInvitationResponse DTO, or Error
        """
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.tenant_id != actor.tenant_id:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_ACCEPTED",
                        "Cannot revoke an invitation that has already been accepted",
                    )
                )

            if invitation.status != InvitationStatus.revoked:
                invitation.status = InvitationStatus.revoked
                invitation.revoked_at = utc_now()
                invitation = await self.uow.invitations.update(invitation)

                tokens = OneTimeTokenService(self.uow)
                await tokens.revoke(
                    TokenPurpose.invite,
                    Invitation.subject_key(invitation.tenant_id, invitation.email),
                )

            response = RevokeInvitationResponse(
                invite_id=str(invitation.id),
                email=invitation.email,
                status=invitation.status.value,
            )

            await self.uow.commit()

        return Return.ok(response)
