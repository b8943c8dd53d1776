from uuid import uuid4

import pytest

from tenantgate.app.use_cases.auth.login_use_case import LoginUseCase
from tenantgate.app.use_cases.auth.passwords import hash_password
from tenantgate.domain.entities import User

PASSWORD = "SecurePass123!"


def _user(tenant_id=None, password=PASSWORD, status="active"):
    return User(
        id=uuid4(),
        tenant_id=tenant_id or uuid4(),
        email="user@acme.com",
        password_hash=hash_password(password) if password else None,
        role="member",
        status=status,
    )


@pytest.mark.asyncio
async def test_successful_login(mock_uow):
    user = _user()
    mock_uow.users.get_by_email.return_value = [user]

    result = await LoginUseCase(mock_uow).execute("USER@acme.com", PASSWORD)

    assert result.is_ok()
    assert result.value.tenant_id == str(user.tenant_id)
    assert result.value.email == "user@acme.com"
    mock_uow.users.get_by_email.assert_called_once_with("user@acme.com")


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow):
    mock_uow.users.get_by_email.return_value = [_user()]

    result = await LoginUseCase(mock_uow).execute("user@acme.com", "WrongPassword!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_unknown_email_has_same_error(mock_uow):
    mock_uow.users.get_by_email.return_value = []

    result = await LoginUseCase(mock_uow).execute("nobody@acme.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_invited_user_without_password(mock_uow):
    mock_uow.users.get_by_email.return_value = [_user(password=None)]

    result = await LoginUseCase(mock_uow).execute("user@acme.com", PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_selects_requested_tenant(mock_uow):
    first = _user()
    second = _user()
    mock_uow.users.get_by_email.return_value = [first, second]

    result = await LoginUseCase(mock_uow).execute(
        "user@acme.com", PASSWORD, tenant_id=second.tenant_id
    )

    assert result.is_ok()
    assert result.value.tenant_id == str(second.tenant_id)


@pytest.mark.asyncio
async def test_login_does_not_check_status(mock_uow):
    """Blocked users get a session; the authorization gate denies them later"""
    mock_uow.users.get_by_email.return_value = [_user(status="blocked")]

    result = await LoginUseCase(mock_uow).execute("user@acme.com", PASSWORD)

    assert result.is_ok()
