from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgate.app.repositories.user_repository import IUserRepository
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import User, UserRole, UserStatus


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_and_email(self, tenant_id: UUID, email: str) -> Optional[User]:
        """Get the user row for an email inside one tenant"""
        stmt = select(User).where(User.tenant_id == tenant_id, User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> List[User]:
        """Get all user rows (across tenants) for an email, oldest first"""
        stmt = select(User).where(User.email == email).order_by(User.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_password_by_email(self, email: str, password_hash: str) -> int:
        """Set the password hash on every user row for an email"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values(password_hash=password_hash, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_billable_members(self, tenant_id: UUID) -> int:
        """Count non-blocked users with the member role"""
        stmt = select(func.count()).select_from(User).where(
            User.tenant_id == tenant_id,
            User.role == UserRole.member.value,
            User.status != UserStatus.blocked.value,
        )
        result = await self.session.exec(stmt)
        return int(result.one())

    async def list_by_tenant(self, tenant_id: UUID) -> List[User]:
        """List every user row of a tenant, by email"""
        stmt = select(User).where(User.tenant_id == tenant_id).order_by(User.email)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def mark_email_verified_by_email(self, email: str) -> int:
        """Flag every user row for an email as verified"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values(email_verified=True, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
