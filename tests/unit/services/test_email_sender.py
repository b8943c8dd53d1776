import json

import httpx
import pytest

from tenantgate.adapter.services.email_sender import (
    RESEND_API_URL,
    LoggingEmailSender,
    ResendEmailSender,
)
from tenantgate.app.services.email_content import (
    build_link,
    invitation_email,
    password_reset_email,
)


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_resend_sender_posts_message():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email_123"})

    async with _client(handler) as client:
        sender = ResendEmailSender("re_test_key", "Acme <no-reply@acme.com>", client=client)
        await sender.send(" user@acme.com ", "Hello", "<p>Hi</p>")

    assert captured["url"] == RESEND_API_URL
    assert captured["auth"] == "Bearer re_test_key"
    assert captured["body"] == {
        "from": "Acme <no-reply@acme.com>",
        "to": ["user@acme.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }


@pytest.mark.asyncio
async def test_resend_sender_raises_on_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "invalid from address"})

    async with _client(handler) as client:
        sender = ResendEmailSender("re_test_key", "no-reply@acme.com", client=client)
        with pytest.raises(httpx.HTTPStatusError):
            await sender.send("user@acme.com", "Hello", "<p>Hi</p>")


@pytest.mark.asyncio
async def test_resend_sender_requires_recipient():
    sender = ResendEmailSender("re_test_key", "no-reply@acme.com")

    with pytest.raises(ValueError):
        await sender.send("  ", "Hello", "<p>Hi</p>")


@pytest.mark.parametrize("api_key,sender", [("", "no-reply@acme.com"), ("key", "")])
def test_resend_sender_requires_configuration(api_key, sender):
    with pytest.raises(ValueError):
        ResendEmailSender(api_key, sender)


@pytest.mark.asyncio
async def test_logging_sender_does_not_raise():
    await LoggingEmailSender().send("user@acme.com", "Hello", "<p>Hi</p>")


def test_build_link_escapes_token():
    link = build_link("https://app.acme.com/", "/reset-password", "abc def")

    assert link == "https://app.acme.com/reset-password?token=abc%20def"


def test_password_reset_email_contains_link_and_ttl():
    subject, html = password_reset_email("https://app.acme.com/reset-password?token=x", 60)

    assert subject == "Reset your password"
    assert "https://app.acme.com/reset-password?token=x" in html
    assert "60 minutes" in html


def test_invitation_email_escapes_tenant_name():
    subject, html = invitation_email("https://app.acme.com/accept-invite?token=x", "<Acme>", "member")

    assert "<Acme>" in subject
    assert "&lt;Acme&gt;" in html
    assert "<Acme>" not in html
    assert "member" in html
