"""
Session Manager

Issues, reads and clears the identity session cookie.
The session carries identity only (tenant_id + email); role, status
and plan are resolved from storage by the authorization gate.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from config import ApplicationConfig
from tenantgate.domain.base import normalize_email

from .token_crypto import sign_identity, verify_identity

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Verified identity extracted from a session"""

    tenant_id: UUID
    email: str


class SessionCookie(BaseModel):
    """A cookie write instruction for the HTTP layer"""

    name: str
    value: str
    max_age: int
    path: str = "/"
    httponly: bool = True
    samesite: str = "lax"
    secure: bool = False


def _session_ttl() -> timedelta:
    return timedelta(days=ApplicationConfig.SESSION_TTL_DAYS)


def _cookie(value: str, max_age: int) -> SessionCookie:
    return SessionCookie(
        name=ApplicationConfig.SESSION_COOKIE_NAME,
        value=value,
        max_age=max_age,
        secure=ApplicationConfig.ENVIRONMENT == "production",
    )


def issue_session(
    tenant_id: UUID, email: str, now: Optional[datetime] = None
) -> SessionCookie:
    """Sign an identity session and wrap it as a cookie write"""
    ttl = _session_ttl()
    token = sign_identity(
        {"tenant_id": str(tenant_id), "email": normalize_email(email)},
        expires_delta=ttl,
        now=now,
    )
    return _cookie(token, int(ttl.total_seconds()))


def read_session(cookie_value: Optional[str]) -> Optional[Identity]:
    """
    Verify a session cookie value.

    Returns None for every failure (missing, malformed, bad signature,
    expired, incomplete claims). The reason is only logged.
    """
    if not cookie_value:
        return None

    result = verify_identity(cookie_value)
    if result.is_err():
        logger.debug(f"Session rejected: {result.error.code}")
        return None

    claims = result.value
    tenant_id = claims.get("tenant_id")
    email = claims.get("email")
    if not tenant_id or not email:
        logger.debug("Session rejected: MISSING_CLAIMS")
        return None

    try:
        return Identity(tenant_id=UUID(str(tenant_id)), email=normalize_email(str(email)))
    except ValueError:
        logger.debug("Session rejected: MALFORMED_CLAIMS")
        return None


def clear_session() -> SessionCookie:
    """Cookie write that expires the session immediately"""
    return _cookie("", 0)
