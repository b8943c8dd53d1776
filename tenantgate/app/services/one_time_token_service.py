"""
One-Time Token Store

Issues, consumes and revokes single-use secrets (password reset, invite,
email verification).

No operation commits. The caller owns the unit of work so that
consuming a token and the state change it authorizes are committed
together, or not at all.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import TokenPurpose
from tenantgate.libs.result import Error, Result, Return

from .token_crypto import generate_secret, hash_secret, secrets_match

logger = logging.getLogger(__name__)

INVALID_OR_EXPIRED = "INVALID_OR_EXPIRED"


class OneTimeTokenService:
    """
    Single-use secret grants against the one_time_tokens table.

    Business Rules:
    - Raw secrets are returned to the caller for delivery, never stored
    - Issuing for a subject overwrites any earlier unconsumed token
    - A token can be consumed at most once; unknown, expired, already
      consumed and lost-race attempts all fail with INVALID_OR_EXPIRED
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def issue(self, purpose: TokenPurpose, subject_key: str, ttl_minutes: int) -> str:
        """
        Issue a new secret for a subject.

        Args:
            purpose: What the token authorizes
            subject_key: Subject the token is bound to (email, tenant:email)
            ttl_minutes: Validity from now

        Returns:
            The raw secret
        """
        if ttl_minutes <= 0:
            raise ValueError("ttl_minutes must be positive")

        secret = generate_secret()
        expires_at = self.clock() + timedelta(minutes=ttl_minutes)
        await self.uow.one_time_tokens.upsert(
            purpose=purpose,
            subject_key=subject_key,
            token_hash=hash_secret(secret),
            expires_at=expires_at,
        )
        logger.info(f"One-time token issued: purpose={purpose.value}")
        return secret

    async def consume(self, purpose: TokenPurpose, secret: str) -> Result[str]:
        """
        Consume a secret.

        Args:
            purpose: Expected purpose of the token
            secret: Raw secret as received from the link

        Returns:
            Result with the subject key, or Error INVALID_OR_EXPIRED
        """
        invalid = Return.err(Error(INVALID_OR_EXPIRED, "Invalid or expired token"))
        if not secret:
            return invalid

        digest = hash_secret(secret)
        token = await self.uow.one_time_tokens.get_by_token_hash(purpose, digest)
        if token is None or not secrets_match(digest, token.token_hash):
            logger.info(f"Token consumption rejected: purpose={purpose.value} reason=UNKNOWN")
            return invalid

        now = self.clock()
        if token.expires_at is None or now > token.expires_at:
            logger.info(f"Token consumption rejected: purpose={purpose.value} reason=EXPIRED")
            return invalid

        # Conditional clear: only one concurrent consumer can match the hash
        consumed = await self.uow.one_time_tokens.consume(token.id, digest, now)
        if not consumed:
            logger.warning(
                f"Token consumption rejected: purpose={purpose.value} reason=ALREADY_CONSUMED"
            )
            return invalid

        return Return.ok(token.subject_key)

    async def revoke(self, purpose: TokenPurpose, subject_key: str) -> bool:
        """Invalidate the outstanding token of a subject, if any"""
        cleared = await self.uow.one_time_tokens.revoke(purpose, subject_key)
        if cleared:
            logger.info(f"One-time token revoked: purpose={purpose.value}")
        return cleared > 0
