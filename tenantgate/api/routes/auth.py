"""
Authentication API Routes

Signup, login/logout, email verification, password reset and invitation
acceptance.
Every successful sign-in sets the identity-only session cookie.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenantgate.api.error import ClientError, ServerError
from tenantgate.api.utils.cookies import apply_cookie
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.session_manager import clear_session, issue_session
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    SignupResponse,
    SignupUseCase,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from tenantgate.app.use_cases.tenants import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from tenantgate.depends import get_email_sender, get_unit_of_work, rate_limit_by_ip

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before calling SignupUseCase.
    """

    email: EmailStr = Field(..., description="Owner email address")
    password: str = Field(..., description="Owner password (min 8 chars)")
    tenant_name: str = Field(
        ..., min_length=1, max_length=255, description="Tenant/organization name"
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:signup"))],
)
async def signup(
    request: SignupRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Tenant Signup

    Creates a tenant with its owner, signs the owner in and emails a
    verification link.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 429 Too Many Requests: Rate limited
    """
    use_case = SignupUseCase(
        uow,
        email_sender,
        base_url=ApplicationConfig.APP_BASE_URL,
        verify_ttl_minutes=ApplicationConfig.EMAIL_VERIFY_TTL_MINUTES,
    )
    result = await use_case.execute(request.email, request.password, request.tenant_name)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code in ("INVALID_EMAIL", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    created = result.value
    apply_cookie(response, issue_session(UUID(created.tenant_id), created.email))
    return created


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    tenant_id is only needed when the email belongs to several tenants.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    tenant_id: Optional[UUID] = Field(None, description="Tenant to sign in to")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(rate_limit_by_ip("auth:login"))],
)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    User Login

    Verifies credentials and sets the identity-only session cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 429 Too Many Requests: Rate limited
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password, request.tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    identity = result.value
    apply_cookie(response, issue_session(UUID(identity.tenant_id), identity.email))
    return {"ok": True, "tenant_id": identity.tenant_id}


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """Clears the session cookie. Always succeeds."""
    apply_cookie(response, clear_session())
    return {"ok": True}


class RequestPasswordResetRequest(BaseModel):
    """Request password reset HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:request-password-reset"))],
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Rate limited per client IP
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_sender,
        base_url=ApplicationConfig.APP_BASE_URL,
        ttl_minutes=ApplicationConfig.PASSWORD_RESET_TTL_MINUTES,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:reset-password"))],
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: INVALID_OR_EXPIRED, INVALID_PASSWORD
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_OR_EXPIRED", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class AcceptInviteRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    The password becomes the account password for the invited email.
    """

    token: str = Field(..., min_length=1, description="Invitation token")
    password: str = Field(..., description="Password (min 8 chars)")


@router.post(
    "/accept-invite",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:accept-invite"))],
)
async def accept_invite(
    request: AcceptInviteRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    Activates the invited account and signs it in.

    Raises:
        - 400 Bad Request: INVALID_OR_EXPIRED, INVALID_PASSWORD
        - 403 Forbidden: SEAT_LIMIT_EXCEEDED (the link stays usable)
        - 500 Internal Server Error: Server error
    """
    use_case = AcceptInvitationUseCase(uow)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_OR_EXPIRED", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "SEAT_LIMIT_EXCEEDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    accepted = result.value
    apply_cookie(response, issue_session(UUID(accepted.tenant_id), accepted.email))
    return accepted


class VerifyEmailRequest(BaseModel):
    """Verify email HTTP request payload"""

    token: str = Field(..., min_length=1, description="Email verification token")


@router.post(
    "/verify-email",
    status_code=status.HTTP_200_OK,
    response_model=VerifyEmailResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:verify-email"))],
)
async def verify_email(
    request: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify Email

    Raises:
        - 400 Bad Request: INVALID_OR_EXPIRED
        - 429 Too Many Requests: Rate limited
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResendVerificationRequest(BaseModel):
    """Resend verification HTTP request payload"""

    email: EmailStr = Field(..., description="Email address to verify")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
    dependencies=[Depends(rate_limit_by_ip("auth:resend-verification"))],
)
async def resend_verification(
    request: ResendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Resend Verification Email

    Security:
        - No email enumeration (same response for any email)
        - Rate limited per client IP
    """
    use_case = ResendVerificationUseCase(
        uow,
        email_sender,
        base_url=ApplicationConfig.APP_BASE_URL,
        ttl_minutes=ApplicationConfig.EMAIL_VERIFY_TTL_MINUTES,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
