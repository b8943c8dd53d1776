"""
Tenant Entity

Represents an isolated workspace (agency) with one subscription plan.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from tenantgate.domain.base import utc_now


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated workspace for organizations.

    Business Rules:
    - Exactly one current plan; the raw value is written by billing
      and normalized on every read (unknown values mean free)
    - Members live in the users table, scoped by tenant_id
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    plan: Optional[str] = Field(default="free", max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
