from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from tenantgate.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation for an email inside a tenant"""
        pass

    @abstractmethod
    async def list_pending(self, tenant_id: UUID, now: datetime) -> List[Invitation]:
        """List pending, unexpired invitations of a tenant"""
        pass

    @abstractmethod
    async def count_pending_members(
        self, tenant_id: UUID, now: datetime, exclude_id: Optional[UUID] = None
    ) -> int:
        """Count pending, unexpired member invitations (reserved seats)"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass
