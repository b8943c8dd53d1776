"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class SignupResponse(BaseModel):
    """Response for signup use case"""

    tenant_id: str
    user_id: str
    email: str
    plan: str
    email_verified: bool


class LoginResponse(BaseModel):
    """
    Response for login use case.

    Carries identity only; the route turns it into a session cookie.
    """

    tenant_id: str
    email: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


class VerifyEmailResponse(BaseModel):
    """Response for verify email use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification use case"""

    status: str
    message: str
