"""
Use Cases

Organized into domain folders:
- auth/: Signup, login, password reset
- tenants/: Invitations and member management
"""

from .auth import (
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    SignupUseCase,
)
from .tenants import (
    AcceptInvitationUseCase,
    InviteMemberUseCase,
    UpdateMemberUseCase,
)

__all__ = [
    # Auth
    "SignupUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Tenants
    "InviteMemberUseCase",
    "AcceptInvitationUseCase",
    "UpdateMemberUseCase",
]
