"""
OneTimeToken Entity

Single-use secret grants (password reset, invite, email verification).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgate.domain.base import utc_now

from .enums import TokenPurpose


class OneTimeToken(SQLModel, table=True):
    """
    OneTimeToken entity - hashed single-use secrets.

    Business Rules:
    - Only the SHA-256 hash of the secret is stored, never the secret
    - One row per (purpose, subject_key); re-issuing overwrites the hash,
      which invalidates any earlier unconsumed secret
    - Consumption clears token_hash and expires_at together and sets
      consumed_at; a cleared row can never match again
    - Expiry is a time comparison, not a stored state
    """

    __tablename__ = "one_time_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    purpose: TokenPurpose = Field(nullable=False)
    subject_key: str = Field(max_length=320, nullable=False)

    token_hash: Optional[str] = Field(default=None, max_length=64, index=True)
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    consumed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_one_time_token_subject", "purpose", "subject_key", unique=True),
    )
