"""
Tenant Management Use Cases

Invitations and member management.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    InviteMemberResponse,
    ListMembersResponse,
    RevokeInvitationResponse,
    UpdateMemberResponse,
)
from .invite_member_use_case import InviteMemberUseCase
from .list_members_use_case import ListMembersUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase
from .update_member_use_case import UpdateMemberUseCase

__all__ = [
    "InviteMemberUseCase",
    "AcceptInvitationUseCase",
    "RevokeInvitationUseCase",
    "ListMembersUseCase",
    "UpdateMemberUseCase",
    "InviteMemberResponse",
    "AcceptInvitationResponse",
    "RevokeInvitationResponse",
    "ListMembersResponse",
    "UpdateMemberResponse",
]
