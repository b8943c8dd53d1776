import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock(return_value=None)
    uow.tenants.create = AsyncMock(side_effect=lambda tenant: tenant)
    uow.tenants.update = AsyncMock(side_effect=lambda tenant: tenant)

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_tenant_and_email = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.update_password_by_email = AsyncMock(return_value=1)
    uow.users.count_billable_members = AsyncMock(return_value=0)
    uow.users.list_by_tenant = AsyncMock(return_value=[])
    uow.users.mark_email_verified_by_email = AsyncMock(return_value=1)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_tenant_and_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.update = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.list_pending = AsyncMock(return_value=[])
    uow.invitations.count_pending_members = AsyncMock(return_value=0)

    uow.one_time_tokens = MagicMock()
    uow.one_time_tokens.upsert = AsyncMock()
    uow.one_time_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.one_time_tokens.consume = AsyncMock(return_value=True)
    uow.one_time_tokens.revoke = AsyncMock(return_value=1)

    uow.rate_limits = MagicMock()
    uow.rate_limits.hit = AsyncMock(return_value=1)

    return uow


@pytest.fixture
def email_sender():
    """Mock email sender recording every send"""
    sender = MagicMock()
    sender.send = AsyncMock()
    return sender
