"""
Email Content

HTML bodies for token links (reset, invite, verification).
Values are escaped before interpolation.
"""

from html import escape
from urllib.parse import quote


def build_link(base_url: str, path: str, token: str) -> str:
    return f"{base_url.rstrip('/')}{path}?token={quote(token)}"


def password_reset_email(reset_url: str, ttl_minutes: int) -> tuple[str, str]:
    subject = "Reset your password"
    html = f"""
<div style="font-family: ui-sans-serif, system-ui, sans-serif;">
  <h2>Reset your password</h2>
  <p>Click the link below to set a new password. This link expires in {ttl_minutes} minutes.</p>
  <p><a href="{escape(reset_url)}">Reset password</a></p>
  <p style="color:#6b7280;font-size:12px;">If you didn't request this, you can ignore this email.</p>
</div>
""".strip()
    return subject, html


def invitation_email(accept_url: str, tenant_name: str, role: str) -> tuple[str, str]:
    subject = f"You're invited to join {tenant_name}"
    html = f"""
<div style="font-family: ui-sans-serif, system-ui, sans-serif;">
  <h2>Join {escape(tenant_name)}</h2>
  <p>You have been invited as <strong>{escape(role)}</strong>.</p>
  <p><a href="{escape(accept_url)}">Accept invitation</a></p>
</div>
""".strip()
    return subject, html


def verification_email(verify_url: str, ttl_minutes: int) -> tuple[str, str]:
    subject = "Verify your email"
    html = f"""
<div style="font-family: ui-sans-serif, system-ui, sans-serif;">
  <h2>Verify your email</h2>
  <p>Confirm this address for your workspace. This link expires in {ttl_minutes} minutes.</p>
  <p><a href="{escape(verify_url)}">Verify email</a></p>
</div>
""".strip()
    return subject, html
