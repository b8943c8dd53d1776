from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from tenantgate.api.error import ClientError, ServerError
from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.app.use_cases.tenants import (
    ListMembersResponse,
    ListMembersUseCase,
    UpdateMemberResponse,
    UpdateMemberUseCase,
)
from tenantgate.depends import get_unit_of_work, rate_limit_by_actor, require_owner

router = APIRouter(prefix="/members", tags=["Members"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListMembersResponse)
async def list_members(
    actor: Actor = Depends(rate_limit_by_actor("members:list", gate=require_owner)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Members

    Owner-only. Users ordered pending, active, blocked, plus outstanding
    invitations. The ids feed /members/update and DELETE /invites/{invitation_id}.

    Raises:
        - 401 Unauthorized: No valid session
        - 403 Forbidden: Not an active owner
        - 429 Too Many Requests: Rate limited
    """
    result = await ListMembersUseCase(uow).execute(actor)
    if result.is_err():
        raise ServerError(result.error)
    return result.value


class UpdateMemberRequest(BaseModel):
    """Update member HTTP request payload"""

    user_id: UUID = Field(..., description="Member to update")
    status: Optional[str] = Field(None, description="active, pending or blocked")
    role: Optional[str] = Field(None, description="owner, admin or member")


@router.post(
    "/update",
    status_code=status.HTTP_200_OK,
    response_model=UpdateMemberResponse,
)
async def update_member(
    request: UpdateMemberRequest,
    actor: Actor = Depends(rate_limit_by_actor("members:update", gate=require_owner)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Member

    Owner-only approve/block/promote. The target's next request sees the
    new role and status.

    Raises:
        - 400 Bad Request: INVALID_STATUS, INVALID_ROLE, NOTHING_TO_UPDATE,
                           CANNOT_MODIFY_SELF
        - 401 Unauthorized: No valid session
        - 403 Forbidden: Not an active owner, SEAT_LIMIT_EXCEEDED
        - 404 Not Found: MEMBER_NOT_FOUND
        - 429 Too Many Requests: Rate limited
    """
    use_case = UpdateMemberUseCase(uow)
    result = await use_case.execute(actor, request.user_id, request.status, request.role)

    if result.is_err():
        error = result.error
        if error.code in (
            "INVALID_STATUS",
            "INVALID_ROLE",
            "NOTHING_TO_UPDATE",
            "CANNOT_MODIFY_SELF",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "SEAT_LIMIT_EXCEEDED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "MEMBER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
