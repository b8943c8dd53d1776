"""
Invitation Entity

Pending invitations to join a tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgate.domain.base import utc_now

from .enums import InvitationStatus, UserRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending invitations to join a tenant.

    Business Rules:
    - Created by the tenant owner
    - One pending invitation per (tenant, email); re-inviting reuses it
    - The secret lives in one_time_tokens under subject "<tenant_id>:<email>",
      so a new invite link invalidates the previous one
    - Pending member invites that have not expired reserve a seat
    - Revoking clears the invite token; accepted invites cannot be revoked
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: str = Field(default=UserRole.member.value, max_length=32)
    status: InvitationStatus = Field(default=InvitationStatus.pending)

    invited_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_tenant_email", "tenant_id", "email"),
        Index("idx_invitation_status", "status"),
    )

    @staticmethod
    def subject_key(tenant_id: UUID, email: str) -> str:
        return f"{tenant_id}:{email}"
