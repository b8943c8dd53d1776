import pytest
from httpx import AsyncClient

from tests.fixtures.api_helpers import signup


@pytest.mark.asyncio
async def test_password_reset_flow(client: AsyncClient, test_data, email_outbox):
    """Request a reset, follow the emailed link, log in with the new password"""
    owner = test_data.get_copy("owner")
    await signup(client, owner)

    requested = await client.post("/auth/request-password-reset", json={"email": owner["email"]})
    assert requested.status_code == 200
    assert requested.json()["status"] == "sent"

    token = email_outbox.last_token(owner["email"])
    reset = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "BrandNewPass1!"}
    )
    assert reset.status_code == 200
    assert reset.json()["status"] == "success"

    old_login = await client.post(
        "/auth/login", json={"email": owner["email"], "password": owner["password"]}
    )
    new_login = await client.post(
        "/auth/login", json={"email": owner["email"], "password": "BrandNewPass1!"}
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_reset_token_cannot_be_reused(client: AsyncClient, test_data, email_outbox):
    owner = test_data.get_copy("owner")
    await signup(client, owner)
    await client.post("/auth/request-password-reset", json={"email": owner["email"]})
    token = email_outbox.last_token(owner["email"])

    first = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "BrandNewPass1!"}
    )
    second = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "AnotherPass1!"}
    )

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_OR_EXPIRED"


@pytest.mark.asyncio
async def test_new_request_invalidates_earlier_link(client: AsyncClient, test_data, email_outbox):
    owner = test_data.get_copy("owner")
    await signup(client, owner)
    await client.post("/auth/request-password-reset", json={"email": owner["email"]})
    old_token = email_outbox.last_token(owner["email"])
    await client.post("/auth/request-password-reset", json={"email": owner["email"]})
    new_token = email_outbox.last_token(owner["email"])

    old = await client.post(
        "/auth/reset-password", json={"token": old_token, "new_password": "BrandNewPass1!"}
    )
    new = await client.post(
        "/auth/reset-password", json={"token": new_token, "new_password": "BrandNewPass1!"}
    )

    assert old_token != new_token
    assert old.status_code == 400
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_request_reset_unknown_email_same_response(client: AsyncClient, email_outbox):
    response = await client.post(
        "/auth/request-password-reset", json={"email": "nobody@acme.com"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "sent"
    assert email_outbox.sent == []


@pytest.mark.asyncio
async def test_reset_with_weak_password_keeps_token(client: AsyncClient, test_data, email_outbox):
    owner = test_data.get_copy("owner")
    await signup(client, owner)
    await client.post("/auth/request-password-reset", json={"email": owner["email"]})
    token = email_outbox.last_token(owner["email"])

    weak = await client.post("/auth/reset-password", json={"token": token, "new_password": "short"})
    strong = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "BrandNewPass1!"}
    )

    assert weak.status_code == 400
    assert weak.json()["error"]["code"] == "INVALID_PASSWORD"
    assert strong.status_code == 200
