"""
List Members Use Case

Loads the owner's view of the tenant: user rows and outstanding invitations.
"""

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import UserStatus, normalize_role, normalize_status
from tenantgate.libs.result import Result, Return

from .dtos import ListMembersResponse, MemberItem, PendingInvitationItem

# Pending approvals first, then active, then blocked
STATUS_ORDER = {UserStatus.pending: 0, UserStatus.active: 1, UserStatus.blocked: 2}


class ListMembersUseCase:
    """
    Use case for listing the members of the caller's tenant.

    Business Rules:
    - Caller is an owner (enforced by the authorization gate)
    - Role and status are normalized the same way the gate reads them
    - Members ordered pending, active, blocked, then by email
    - Only pending, unexpired invitations are listed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor) -> Result[ListMembersResponse]:
        async with self.uow:
            users = await self.uow.users.list_by_tenant(actor.tenant_id)
            invitations = await self.uow.invitations.list_pending(actor.tenant_id, utc_now())

            # Build inside the block: rows expire on the exit rollback
            members = [
                MemberItem(
                    user_id=str(user.id),
                    email=user.email,
                    role=normalize_role(user.role).value,
                    status=normalize_status(user.status).value,
                    email_verified=bool(user.email_verified),
                    created_at=user.created_at,
                )
                for user in users
            ]
            pending = [
                PendingInvitationItem(
                    invite_id=str(invitation.id),
                    email=invitation.email,
                    role=normalize_role(invitation.role).value,
                    created_at=invitation.created_at,
                    expires_at=invitation.expires_at,
                )
                for invitation in invitations
            ]

        members.sort(key=lambda m: (STATUS_ORDER[UserStatus(m.status)], m.email))
        return Return.ok(ListMembersResponse(members=members, invitations=pending))
