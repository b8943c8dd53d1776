"""
Update Member Use Case

Owner-driven status and role changes (approve, block, promote).
"""

from typing import Optional
from uuid import UUID

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.entities import (
    UserRole,
    UserStatus,
    enum_text,
    normalize_role,
    normalize_status,
)
from tenantgate.libs.result import Error, Result, Return

from .dtos import UpdateMemberResponse
from .seats import check_seat_available


class UpdateMemberUseCase:
    """
    Use case for changing a member's status and/or role.

    Business Rules:
    - Caller is an owner (enforced by the authorization gate)
    - Target must belong to the caller's tenant
    - Owners cannot modify themselves (prevents locking out the tenant)
    - Making someone a non-blocked member who did not hold a seat before
      respects the plan's seat limit
    - Changes apply on the target's next request; sessions carry no role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: Actor,
        user_id: UUID,
        status: Optional[str] = None,
        role: Optional[str] = None,
    ) -> Result[UpdateMemberResponse]:
        new_status = None
        new_role = None

        if status is not None:
            try:
                new_status = UserStatus(enum_text(status))
            except ValueError:
                return Return.err(
                    Error("INVALID_STATUS", "Status must be one of: active, pending, blocked")
                )

        if role is not None:
            try:
                new_role = UserRole(enum_text(role))
            except ValueError:
                return Return.err(
                    Error("INVALID_ROLE", "Role must be one of: owner, admin, member")
                )

        if new_status is None and new_role is None:
            return Return.err(Error("NOTHING_TO_UPDATE", "Provide status and/or role"))

        if user_id == actor.user_id:
            return Return.err(Error("CANNOT_MODIFY_SELF", "Owners cannot modify themselves"))

        async with self.uow:
            target = await self.uow.users.get_by_id(user_id)
            if target is None or target.tenant_id != actor.tenant_id:
                return Return.err(Error("MEMBER_NOT_FOUND", "Member not found"))

            current_role = normalize_role(target.role)
            current_status = normalize_status(target.status)
            final_role = new_role or current_role
            final_status = new_status or current_status

            held_seat = current_role == UserRole.member and current_status != UserStatus.blocked
            needs_seat = final_role == UserRole.member and final_status != UserStatus.blocked
            if needs_seat and not held_seat:
                seats = await check_seat_available(self.uow, actor.tenant_id, actor.plan)
                if seats.is_err():
                    return Return.err(seats.error)

            target.role = final_role.value
            target.status = final_status.value
            target = await self.uow.users.update(target)

            response = UpdateMemberResponse(
                user_id=str(target.id),
                email=target.email,
                role=target.role,
                status=target.status,
            )

            await self.uow.commit()

        return Return.ok(response)
