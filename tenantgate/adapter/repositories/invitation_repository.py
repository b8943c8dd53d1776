from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgate.app.repositories.invitation_repository import IInvitationRepository
from tenantgate.domain.entities import Invitation, InvitationStatus, UserRole


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation for an email inside a tenant"""
        stmt = select(Invitation).where(
            Invitation.tenant_id == tenant_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_pending(self, tenant_id: UUID, now: datetime) -> List[Invitation]:
        """List pending, unexpired invitations of a tenant, newest first"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.tenant_id == tenant_id,
                Invitation.status == InvitationStatus.pending,
                Invitation.expires_at > now,
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_pending_members(
        self, tenant_id: UUID, now: datetime, exclude_id: Optional[UUID] = None
    ) -> int:
        """Count pending, unexpired member invitations (reserved seats)"""
        stmt = select(func.count()).select_from(Invitation).where(
            Invitation.tenant_id == tenant_id,
            Invitation.status == InvitationStatus.pending,
            Invitation.role == UserRole.member.value,
            Invitation.expires_at > now,
        )
        if exclude_id is not None:
            stmt = stmt.where(Invitation.id != exclude_id)
        result = await self.session.exec(stmt)
        return int(result.one())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
