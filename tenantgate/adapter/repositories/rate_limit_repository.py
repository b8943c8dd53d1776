from typing import Optional

from sqlalchemy import case, or_
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgate.adapter.repositories.upsert import dialect_insert
from tenantgate.app.repositories.rate_limit_repository import IRateLimitRepository
from tenantgate.domain.entities import RateLimitCounter


class RateLimitRepository(IRateLimitRepository):
    """RateLimitCounter repository implementation using one conditional upsert"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def hit(self, key: str, window_start: int, limit: int) -> Optional[int]:
        """
        Count one request for key in a single statement.

        INSERT ... ON CONFLICT(key) DO UPDATE ... WHERE ... RETURNING:
        - no row yet: insert count 1
        - stored window differs: reset to the new window with count 1
        - same window under limit: increment
        - same window at limit: the WHERE filters the update out and
          nothing is returned
        """
        table = RateLimitCounter.__table__
        stmt = dialect_insert(self.session, table).values(
            key=key, window_start=window_start, request_count=1
        )
        same_window = table.c.window_start == stmt.excluded.window_start
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.key],
            set_={
                "window_start": stmt.excluded.window_start,
                "request_count": case(
                    (same_window, table.c.request_count + 1), else_=1
                ),
            },
            where=or_(
                table.c.window_start != stmt.excluded.window_start,
                table.c.request_count < limit,
            ),
        ).returning(table.c.request_count)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
