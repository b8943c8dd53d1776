"""
Tenant Management DTOs

Response classes for invitation and member management.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class InviteMemberResponse(BaseModel):
    """Response for invite member use case"""

    invite_id: str
    email: str
    role: str
    status: str


class AcceptInvitationResponse(BaseModel):
    """
    Response for accept invitation use case.

    tenant_id/email are used by the route to issue a session.
    """

    tenant_id: str
    email: str
    role: str


class UpdateMemberResponse(BaseModel):
    """Response for update member use case"""

    user_id: str
    email: str
    role: str
    status: str


class RevokeInvitationResponse(BaseModel):
    """Response for revoke invitation use case"""

    invite_id: str
    email: str
    status: str


class MemberItem(BaseModel):
    """One user row of the tenant"""

    user_id: str
    email: str
    role: str
    status: str
    email_verified: bool
    created_at: datetime


class PendingInvitationItem(BaseModel):
    """One outstanding invitation of the tenant"""

    invite_id: str
    email: str
    role: str
    created_at: datetime
    expires_at: Optional[datetime]


class ListMembersResponse(BaseModel):
    """Response for list members use case"""

    members: List[MemberItem]
    invitations: List[PendingInvitationItem]
