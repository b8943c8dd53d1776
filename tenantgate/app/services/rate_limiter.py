"""
Rate Limiter

Fixed-window request quotas per arbitrary key, backed by the
rate_limits table. Windows are clock-aligned:

    window_start = floor(now / window_ms) * window_ms

Bursts of up to 2x limit across a window boundary are accepted.
"""

import logging
import math
from typing import Callable, Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import epoch_ms
from tenantgate.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

RATE_LIMITED = "RATE_LIMITED"
STORAGE_ERROR = "STORAGE_ERROR"


class RateLimitDecision(BaseModel):
    allowed: bool
    remaining: int = 0
    retry_after_seconds: Optional[int] = None


def window_start_for(now_ms: int, window_ms: int) -> int:
    return (now_ms // window_ms) * window_ms


def retry_after_seconds(window_start: int, window_ms: int, now_ms: int) -> int:
    return max(1, math.ceil((window_start + window_ms - now_ms) / 1000))


def rate_limit_key(scope: str, identifier: str, route: str) -> str:
    """Key such as "actor:<user_id>:<route>" or "ip:<addr>:<route>" """
    return f"{scope}:{identifier}:{route}"


class RateLimiter:
    """
    Persistent fixed-window limiter.

    Business Rules:
    - Read-check-write happens in one atomic storage statement, so N
      concurrent calls on one key admit at most `limit` per window
    - A stale window is reset, never accumulated
    - Storage failures return STORAGE_ERROR (callers fail closed)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], int] = epoch_ms):
        self.uow = uow
        self.clock = clock

    async def check(
        self, key: str, limit: int, window_ms: int, now_ms: Optional[int] = None
    ) -> Result[RateLimitDecision]:
        """
        Count one request against key.

        Args:
            key: Counter key
            limit: Admissions allowed per window
            window_ms: Window length in milliseconds
            now_ms: Current time override (epoch milliseconds)

        Returns:
            Result with the decision, or Error STORAGE_ERROR
        """
        if limit <= 0 or window_ms <= 0:
            raise ValueError("limit and window_ms must be positive")

        now = self.clock() if now_ms is None else now_ms
        window_start = window_start_for(now, window_ms)

        try:
            async with self.uow:
                count = await self.uow.rate_limits.hit(key, window_start, limit)
                await self.uow.commit()
        except SQLAlchemyError:
            logger.exception(f"Rate limit check failed for key {key}")
            return Return.err(Error(STORAGE_ERROR, "Storage unavailable"))

        if count is None:
            retry_after = retry_after_seconds(window_start, window_ms, now)
            logger.info(f"Rate limited: key={key} retry_after={retry_after}s")
            return Return.ok(
                RateLimitDecision(allowed=False, remaining=0, retry_after_seconds=retry_after)
            )

        return Return.ok(RateLimitDecision(allowed=True, remaining=max(0, limit - count)))
