from abc import ABC, abstractmethod

from tenantgate.app.repositories.invitation_repository import IInvitationRepository
from tenantgate.app.repositories.one_time_token_repository import IOneTimeTokenRepository
from tenantgate.app.repositories.rate_limit_repository import IRateLimitRepository
from tenantgate.app.repositories.tenant_repository import ITenantRepository
from tenantgate.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    tenants: ITenantRepository
    users: IUserRepository
    invitations: IInvitationRepository
    one_time_tokens: IOneTimeTokenRepository
    rate_limits: IRateLimitRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
