"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .dtos import (
    SignupResponse,
    LoginResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
    VerifyEmailResponse,
    ResendVerificationResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
]
