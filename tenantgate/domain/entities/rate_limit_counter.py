"""
RateLimitCounter Entity

Fixed-window request counters.
"""

from sqlalchemy import BigInteger
from sqlmodel import Column, Field, SQLModel


class RateLimitCounter(SQLModel, table=True):
    """
    RateLimitCounter entity - one counter per arbitrary key.

    Business Rules:
    - window_start is the clock-aligned window start in epoch milliseconds
    - A stored window_start different from the current one is stale and is
      reset to a count of 1, never accumulated
    - All updates go through one atomic upsert (see RateLimitRepository)
    """

    __tablename__ = "rate_limits"

    key: str = Field(primary_key=True, max_length=255)
    window_start: int = Field(sa_column=Column(BigInteger, nullable=False))
    request_count: int = Field(default=0, nullable=False)
