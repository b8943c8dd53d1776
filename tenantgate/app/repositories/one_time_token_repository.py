from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from tenantgate.domain.entities import OneTimeToken, TokenPurpose


class IOneTimeTokenRepository(ABC):
    """OneTimeToken repository interface - application layer"""

    @abstractmethod
    async def upsert(
        self,
        purpose: TokenPurpose,
        subject_key: str,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        """Store a fresh hash for a subject, replacing any earlier token"""
        pass

    @abstractmethod
    async def get_by_token_hash(
        self, purpose: TokenPurpose, token_hash: str
    ) -> Optional[OneTimeToken]:
        """Get a token row by its hash"""
        pass

    @abstractmethod
    async def consume(self, token_id: UUID, token_hash: str, now: datetime) -> bool:
        """
        Clear hash and expiry if the row still holds this unexpired hash.

        Returns True only for the single caller whose update matched.
        """
        pass

    @abstractmethod
    async def revoke(self, purpose: TokenPurpose, subject_key: str) -> int:
        """Clear any outstanding token of a subject; returns rows cleared"""
        pass
