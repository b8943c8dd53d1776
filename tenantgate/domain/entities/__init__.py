"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    Feature,
    InvitationStatus,
    PlanKey,
    TokenPurpose,
    UserRole,
    UserStatus,
    enum_text,
    normalize_role,
    normalize_status,
)

# Export all entities
from .tenant import Tenant
from .user import User
from .invitation import Invitation
from .one_time_token import OneTimeToken
from .rate_limit_counter import RateLimitCounter

__all__ = [
    # Enums
    "Feature",
    "InvitationStatus",
    "PlanKey",
    "TokenPurpose",
    "UserRole",
    "UserStatus",
    "enum_text",
    "normalize_role",
    "normalize_status",
    # Entities
    "Tenant",
    "User",
    "Invitation",
    "OneTimeToken",
    "RateLimitCounter",
]
