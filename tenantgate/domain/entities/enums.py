"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum
from typing import Any


class UserRole(str, Enum):
    """User role within a tenant"""

    owner = "owner"
    admin = "admin"
    member = "member"


class UserStatus(str, Enum):
    """User status within a tenant"""

    active = "active"
    pending = "pending"
    blocked = "blocked"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    revoked = "revoked"


class TokenPurpose(str, Enum):
    """What a one-time token authorizes"""

    password_reset = "password_reset"
    invite = "invite"
    email_verify = "email_verify"


class PlanKey(str, Enum):
    """Canonical subscription plans, lowest tier first"""

    free = "free"
    starter = "starter"
    pro = "pro"
    team = "team"
    enterprise = "enterprise"
    corporation = "corporation"


class Feature(str, Enum):
    """Plan-gated product features"""

    chat = "chat"
    document_upload = "document_upload"
    scheduling = "scheduling"
    extraction = "extraction"
    media_upload = "media_upload"
    email = "email"
    spreadsheets = "spreadsheets"


def enum_text(raw: Any) -> str:
    """Lowercased text of a raw value or enum member"""
    if isinstance(raw, Enum):
        raw = raw.value
    return str(raw or "").strip().lower()


def normalize_role(raw: Any) -> UserRole:
    # Unknown roles never grant more than member
    value = enum_text(raw)
    if value == UserRole.owner.value:
        return UserRole.owner
    if value == UserRole.admin.value:
        return UserRole.admin
    return UserRole.member


def normalize_status(raw: Any) -> UserStatus:
    value = enum_text(raw)
    if value == UserStatus.active.value:
        return UserStatus.active
    if value == UserStatus.blocked.value:
        return UserStatus.blocked
    return UserStatus.pending
