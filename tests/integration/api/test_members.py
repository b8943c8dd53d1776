import pytest
from httpx import AsyncClient

from tests.fixtures.api_helpers import invite_and_accept, session_headers, signup


async def _team(client, test_data, email_outbox):
    owner = test_data.get_copy("owner")
    member = test_data.get_copy("member")
    signed_up = await signup(client, owner)
    owner_headers = session_headers(signed_up)
    accepted = await invite_and_accept(client, owner_headers, email_outbox, member)
    member_headers = session_headers(accepted)
    member_id = (await client.get("/me", headers=member_headers)).json()["user_id"]
    owner_id = signed_up.json()["user_id"]
    return owner_headers, member_headers, owner_id, member_id


@pytest.mark.asyncio
async def test_block_takes_effect_on_next_request(client: AsyncClient, test_data, email_outbox):
    owner_headers, member_headers, _, member_id = await _team(client, test_data, email_outbox)

    blocked = await client.post(
        "/members/update",
        json={"user_id": member_id, "status": "blocked"},
        headers=owner_headers,
    )
    assert blocked.status_code == 200
    assert blocked.json()["status"] == "blocked"

    # Same cookie as before the block
    response = await client.get("/me", headers=member_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN_NOT_ACTIVE"


@pytest.mark.asyncio
async def test_promotion_and_demotion_apply_immediately(
    client: AsyncClient, test_data, email_outbox
):
    owner_headers, member_headers, _, member_id = await _team(client, test_data, email_outbox)

    promoted = await client.post(
        "/members/update", json={"user_id": member_id, "role": "owner"}, headers=owner_headers
    )
    assert promoted.status_code == 200
    as_owner = await client.post(
        "/invites", json={"email": "new@acme.com", "role": "admin"}, headers=member_headers
    )
    assert as_owner.status_code == 201

    demoted = await client.post(
        "/members/update", json={"user_id": member_id, "role": "member"}, headers=owner_headers
    )
    assert demoted.status_code == 200
    as_member = await client.post(
        "/invites", json={"email": "other@acme.com", "role": "admin"}, headers=member_headers
    )
    assert as_member.status_code == 403
    assert as_member.json()["error"]["code"] == "FORBIDDEN_NOT_OWNER"


@pytest.mark.asyncio
async def test_owner_cannot_modify_self(client: AsyncClient, test_data, email_outbox):
    owner_headers, _, owner_id, _ = await _team(client, test_data, email_outbox)

    response = await client.post(
        "/members/update", json={"user_id": owner_id, "status": "blocked"}, headers=owner_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_SELF"


@pytest.mark.asyncio
async def test_member_cannot_update_members(client: AsyncClient, test_data, email_outbox):
    _, member_headers, owner_id, _ = await _team(client, test_data, email_outbox)

    response = await client.post(
        "/members/update", json={"user_id": owner_id, "status": "blocked"}, headers=member_headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN_NOT_OWNER"


@pytest.mark.asyncio
async def test_update_unknown_member(client: AsyncClient, test_data, email_outbox):
    owner_headers, _, _, _ = await _team(client, test_data, email_outbox)

    response = await client.post(
        "/members/update",
        json={"user_id": "00000000-0000-0000-0000-000000000000", "status": "active"},
        headers=owner_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MEMBER_NOT_FOUND"


@pytest.mark.asyncio
async def test_owner_lists_members_and_invites(client: AsyncClient, test_data, email_outbox):
    owner_headers, _, owner_id, member_id = await _team(client, test_data, email_outbox)
    second = test_data.get_copy("second_member")
    await client.post(
        "/invites", json={"email": second["email"], "role": "admin"}, headers=owner_headers
    )
    await client.post(
        "/members/update", json={"user_id": member_id, "status": "blocked"}, headers=owner_headers
    )

    response = await client.get("/members", headers=owner_headers)

    assert response.status_code == 200
    body = response.json()
    assert [(m["user_id"], m["status"]) for m in body["members"]] == [
        (owner_id, "active"),
        (member_id, "blocked"),
    ]
    assert [(i["email"], i["role"]) for i in body["invitations"]] == [(second["email"], "admin")]


@pytest.mark.asyncio
async def test_member_cannot_list_members(client: AsyncClient, test_data, email_outbox):
    _, member_headers, _, _ = await _team(client, test_data, email_outbox)

    response = await client.get("/members", headers=member_headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN_NOT_OWNER"
