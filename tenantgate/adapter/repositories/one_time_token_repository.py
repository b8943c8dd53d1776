from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgate.adapter.repositories.upsert import dialect_insert
from tenantgate.app.repositories.one_time_token_repository import IOneTimeTokenRepository
from tenantgate.domain.base import utc_now
from tenantgate.domain.entities import OneTimeToken, TokenPurpose


class OneTimeTokenRepository(IOneTimeTokenRepository):
    """OneTimeToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(
        self,
        purpose: TokenPurpose,
        subject_key: str,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        """Store a fresh hash for a subject, replacing any earlier token"""
        table = OneTimeToken.__table__
        now = utc_now()
        stmt = dialect_insert(self.session, table).values(
            id=uuid4(),
            purpose=purpose,
            subject_key=subject_key,
            token_hash=token_hash,
            expires_at=expires_at,
            consumed_at=None,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.purpose, table.c.subject_key],
            set_={
                "token_hash": stmt.excluded.token_hash,
                "expires_at": stmt.excluded.expires_at,
                "consumed_at": None,
                "created_at": stmt.excluded.created_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def get_by_token_hash(
        self, purpose: TokenPurpose, token_hash: str
    ) -> Optional[OneTimeToken]:
        """Get a token row by its hash"""
        # Core upserts bypass the identity map
        stmt = (
            select(OneTimeToken)
            .where(
                OneTimeToken.purpose == purpose,
                OneTimeToken.token_hash == token_hash,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def consume(self, token_id: UUID, token_hash: str, now: datetime) -> bool:
        """Clear hash and expiry if the row still holds this unexpired hash"""
        stmt = (
            update(OneTimeToken)
            .where(
                OneTimeToken.id == token_id,
                OneTimeToken.token_hash == token_hash,
                OneTimeToken.expires_at >= now,
            )
            .values(token_hash=None, expires_at=None, consumed_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke(self, purpose: TokenPurpose, subject_key: str) -> int:
        """Clear any outstanding token of a subject"""
        stmt = (
            update(OneTimeToken)
            .where(
                OneTimeToken.purpose == purpose,
                OneTimeToken.subject_key == subject_key,
                OneTimeToken.token_hash.is_not(None),
            )
            .values(token_hash=None, expires_at=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
