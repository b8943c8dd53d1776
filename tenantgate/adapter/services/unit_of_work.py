from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgate.adapter.repositories.invitation_repository import InvitationRepository
from tenantgate.adapter.repositories.one_time_token_repository import OneTimeTokenRepository
from tenantgate.adapter.repositories.rate_limit_repository import RateLimitRepository
from tenantgate.adapter.repositories.tenant_repository import TenantRepository
from tenantgate.adapter.repositories.user_repository import UserRepository
from tenantgate.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.tenants = TenantRepository(self.session)
        self.users = UserRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.one_time_tokens = OneTimeTokenRepository(self.session)
        self.rate_limits = RateLimitRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
