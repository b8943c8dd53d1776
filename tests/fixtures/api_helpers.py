from uuid import UUID

from httpx import AsyncClient, Response

from config import ApplicationConfig
from tenantgate.domain.entities import Tenant


def session_headers(response: Response) -> dict:
    """Cookie header carrying the session set by a sign-in response"""
    value = response.cookies[ApplicationConfig.SESSION_COOKIE_NAME]
    return {"Cookie": f"{ApplicationConfig.SESSION_COOKIE_NAME}={value}"}


async def signup(client: AsyncClient, owner: dict) -> Response:
    response = await client.post("/auth/signup", json=owner)
    assert response.status_code == 201, response.text
    return response


async def invite_and_accept(
    client: AsyncClient, owner_headers: dict, email_outbox, member: dict, role: str = "member"
) -> Response:
    """Invite a user as the owner and accept the emailed link"""
    invite = await client.post(
        "/invites", json={"email": member["email"], "role": role}, headers=owner_headers
    )
    assert invite.status_code == 201, invite.text

    token = email_outbox.last_token(member["email"])
    accepted = await client.post(
        "/auth/accept-invite", json={"token": token, "password": member["password"]}
    )
    assert accepted.status_code == 200, accepted.text
    return accepted


async def set_plan(db_session, tenant_id: str, plan: str) -> None:
    """Write a raw plan value the way billing would"""
    tenant = await db_session.get(Tenant, UUID(tenant_id))
    tenant.plan = plan
    db_session.add(tenant)
    await db_session.commit()
