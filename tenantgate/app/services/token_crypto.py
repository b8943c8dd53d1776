"""
Token Crypto

Secret generation, one-way hashing and signed identity tokens.
Pure functions; the only state is the configured signing secret.
"""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig
from tenantgate.libs.result import Error, Result, Return

ALGORITHM = "HS256"
SECRET_BYTES = 32

INVALID_SIGNATURE = "INVALID_SIGNATURE"
EXPIRED = "EXPIRED"


def generate_secret() -> str:
    """256-bit random secret, hex encoded for links"""
    return secrets.token_hex(SECRET_BYTES)


def hash_secret(secret: str) -> str:
    """SHA-256 hex digest of a secret; this is what gets stored"""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def secrets_match(submitted_digest: str, stored_digest: Optional[str]) -> bool:
    """Constant-time digest comparison"""
    if not stored_digest:
        return False
    return hmac.compare_digest(
        submitted_digest.encode("utf-8"), stored_digest.encode("utf-8")
    )


def sign_identity(
    claims: Dict[str, Any],
    expires_delta: timedelta,
    secret: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Sign claims into a compact HS256 JWT.

    Args:
        claims: Identity claims to bind (must not contain iat/exp)
        expires_delta: Validity window from now
        secret: Signing key, defaults to JWT_SECRET
        now: Issue time, defaults to the current time

    Returns:
        JWT string
    """
    issued_at = now or datetime.now(UTC)
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + expires_delta
    return jwt.encode(payload, secret or ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def verify_identity(token: str, secret: Optional[str] = None) -> Result[Dict[str, Any]]:
    """
    Verify a token produced by sign_identity.

    Returns:
        Result with the decoded claims, or Error EXPIRED / INVALID_SIGNATURE
    """
    try:
        claims = jwt.decode(
            token, secret or ApplicationConfig.JWT_SECRET, algorithms=[ALGORITHM]
        )
    except ExpiredSignatureError:
        return Return.err(Error(EXPIRED, "Token has expired"))
    except JWTError:
        return Return.err(Error(INVALID_SIGNATURE, "Token signature is invalid"))
    return Return.ok(claims)
