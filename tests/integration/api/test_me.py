from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from tenantgate.app.services.session_manager import issue_session
from tenantgate.domain.base import utc_now
from tests.fixtures.api_helpers import session_headers, signup


@pytest.mark.asyncio
async def test_me_returns_actor_context(client: AsyncClient, test_data):
    owner = test_data.get_copy("owner")
    response = await signup(client, owner)
    created = response.json()

    me = await client.get("/me", headers=session_headers(response))

    assert me.status_code == 200
    data = me.json()
    assert data["tenant_id"] == created["tenant_id"]
    assert data["user_id"] == created["user_id"]
    assert data["role"] == "owner"
    assert data["status"] == "active"
    assert data["plan"] == "free"
    assert data["features"]["chat"] is True
    assert data["features"]["scheduling"] is False
    assert data["limits"]["max_users"] == 1


@pytest.mark.asyncio
async def test_me_without_session(client: AsyncClient):
    client.cookies.clear()

    response = await client.get("/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_me_with_forged_session(client: AsyncClient):
    client.cookies.clear()

    response = await client.get(
        "/me", headers={"Cookie": f"{ApplicationConfig.SESSION_COOKIE_NAME}=forged.value.here"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_with_expired_session(client: AsyncClient, test_data):
    owner = test_data.get_copy("owner")
    created = (await signup(client, owner)).json()
    expired = issue_session(
        UUID(created["tenant_id"]),
        owner["email"],
        now=utc_now() - timedelta(days=ApplicationConfig.SESSION_TTL_DAYS + 1),
    )

    response = await client.get(
        "/me", headers={"Cookie": f"{expired.name}={expired.value}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"
