from typing import Any, Optional
from uuid import UUID

from tenantgate.app.services.plan_policy import get_plan_limits, normalize_plan
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.base import utc_now
from tenantgate.libs.result import Error, Result, Return


async def check_seat_available(
    uow: UnitOfWork,
    tenant_id: UUID,
    plan: Any,
    exclude_invitation_id: Optional[UUID] = None,
    count_invitations: bool = True,
) -> Result[None]:
    """
    Fail with SEAT_LIMIT_EXCEEDED when one more billable member would exceed the plan.

    Seats in use are non-blocked members plus pending, unexpired member
    invitations. exclude_invitation_id leaves out the invitation being
    re-sent. Accepting an invite passes count_invitations=False: only
    members already in the tenant can take the seat away.
    """
    plan_key = normalize_plan(plan)
    limits = get_plan_limits(plan_key)
    if limits.max_users is None:
        return Return.ok(None)

    used = await uow.users.count_billable_members(tenant_id)
    reserved = 0
    if count_invitations:
        reserved = await uow.invitations.count_pending_members(
            tenant_id, utc_now(), exclude_id=exclude_invitation_id
        )
    if used + reserved >= limits.max_users:
        return Return.err(
            Error(
                "SEAT_LIMIT_EXCEEDED",
                f"Plan {plan_key.value} allows {limits.max_users} members "
                f"({used} active, {reserved} invited)",
            )
        )
    return Return.ok(None)
