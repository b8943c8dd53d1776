"""
User Entity

A person's membership row inside one tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgate.domain.base import utc_now

from .enums import UserRole, UserStatus


class User(SQLModel, table=True):
    """
    User entity - the (tenant, user) actor row.

    Business Rules:
    - (tenant_id, email) must be unique; email stored lower-case
    - Password stored as bcrypt hash (cost factor 12)
    - role/status are stored as plain strings and normalized on read,
      so legacy or unknown values degrade to member/pending
    - Only active users pass the authorization gate
    - email_verified is informational; it does not gate access
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    email: str = Field(max_length=255, index=True)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    role: str = Field(default=UserRole.member.value, max_length=32)
    status: str = Field(default=UserStatus.pending.value, max_length=32)
    email_verified: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_user_status", "status"),
    )
