"""
User API Routes

Current actor context and plan feature checks.
"""

from typing import Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from tenantgate.app.services.authorization_gate import Actor
from tenantgate.app.services.plan_policy import (
    FeatureDecision,
    PlanLimits,
    features_for,
    get_plan_limits,
    require_feature,
)
from tenantgate.depends import check_plan_feature, rate_limit_by_actor

router = APIRouter(tags=["User"])


class MeResponse(BaseModel):
    """GET /me response payload"""
    tenant_id: str
    user_id: str
    email: str
    role: str
    status: str
    plan: str
    email_verified: bool
    features: Dict[str, bool]
    limits: PlanLimits


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(actor: Actor = Depends(rate_limit_by_actor("me"))):
    """
    Load Current Actor

    Role, status and plan are read from storage on this request.

    Raises:
        - 401 Unauthorized: No valid session
        - 403 Forbidden: User is pending or blocked
        - 429 Too Many Requests: Rate limited
    """
    return MeResponse(
        tenant_id=str(actor.tenant_id),
        user_id=str(actor.user_id),
        email=actor.email,
        role=actor.role.value,
        status=actor.status.value,
        plan=actor.plan.value,
        email_verified=actor.email_verified,
        features=features_for(actor.plan),
        limits=get_plan_limits(actor.plan),
    )


@router.get(
    "/features/{feature}",
    status_code=status.HTTP_200_OK,
    response_model=FeatureDecision,
)
async def get_feature(
    feature: str,
    actor: Actor = Depends(rate_limit_by_actor("features")),
):
    """
    Plan Feature Gate

    Raises:
        - 402 Payment Required: Feature exists on a higher plan
        - 403 Forbidden: Unknown feature, or user not active
    """
    check_plan_feature(actor, feature)
    return require_feature(actor.plan, feature)
