from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from tenantgate.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_tenant_and_email(self, tenant_id: UUID, email: str) -> Optional[User]:
        """Get the user row for an email inside one tenant"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> List[User]:
        """Get all user rows (across tenants) for an email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_password_by_email(self, email: str, password_hash: str) -> int:
        """Set the password hash on every user row for an email"""
        pass

    @abstractmethod
    async def count_billable_members(self, tenant_id: UUID) -> int:
        """Count seats that count against the plan (non-blocked members)"""
        pass

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID) -> List[User]:
        """List every user row of a tenant"""
        pass

    @abstractmethod
    async def mark_email_verified_by_email(self, email: str) -> int:
        """Flag every user row for an email as verified"""
        pass
