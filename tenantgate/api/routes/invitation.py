from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenantgate.api.error import ClientError, ServerError
from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.app.use_cases.tenants import (
    InviteMemberResponse,
    InviteMemberUseCase,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
)
from tenantgate.depends import (
    get_email_sender,
    get_unit_of_work,
    rate_limit_by_actor,
    require_owner,
)
from tenantgate.libs.result import Error

router = APIRouter(prefix="/invites", tags=["Invitations"])


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    Validates incoming request for inviting a user to the caller's tenant.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("member", description="Role to assign (admin or member)")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    request: InviteMemberRequest,
    actor: Actor = Depends(rate_limit_by_actor("invites", gate=require_owner)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Invite Member

    Owner-only. Creates (or refreshes) a pending invitation and emails a
    single-use accept link. A re-invite invalidates the previous link.

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_EMAIL
        - 401 Unauthorized: No valid session
        - 403 Forbidden: Not an active owner, or SEAT_LIMIT_EXCEEDED
        - 409 Conflict: ALREADY_MEMBER
        - 429 Too Many Requests: Rate limited
    """
    use_case = InviteMemberUseCase(
        uow,
        email_sender,
        base_url=ApplicationConfig.APP_BASE_URL,
        ttl_minutes=ApplicationConfig.INVITE_TTL_MINUTES,
    )
    result = await use_case.execute(actor, request.email, request.role)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "INVALID_EMAIL"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ALREADY_MEMBER":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "SEAT_LIMIT_EXCEEDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInvitationResponse,
)
async def revoke_invitation(
    invitation_id: str,
    actor: Actor = Depends(rate_limit_by_actor("invites:revoke", gate=require_owner)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invitation

    Owner-only. The emailed link stops working and the reserved seat is freed.

    Raises:
        - 400 Bad Request: Invalid invitation_id format
        - 401 Unauthorized: No valid session
        - 403 Forbidden: Not an active owner
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED
    """
    try:
        invitation_uuid = UUID(invitation_id)
    except ValueError:
        raise ClientError(
            Error("INVALID_INVITATION_ID", "Invalid invitation ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = RevokeInvitationUseCase(uow)
    result = await use_case.execute(actor, invitation_uuid)

    if result.is_err():
        error = result.error
        if error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVITATION_ALREADY_ACCEPTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
