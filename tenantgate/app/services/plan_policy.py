"""
Plan Policy Engine

Single source of truth for plan normalization and feature gating.
Pure functions, no storage access; plan changes happen in billing.
"""

from typing import Any, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel

from tenantgate.domain.entities import Feature, PlanKey, enum_text

ALLOWED = "ALLOWED"
FEATURE_NOT_ALLOWED = "FEATURE_NOT_ALLOWED"

PLAN_ORDER = (
    PlanKey.free,
    PlanKey.starter,
    PlanKey.pro,
    PlanKey.team,
    PlanKey.enterprise,
    PlanKey.corporation,
)


def _from_tier(lowest: PlanKey) -> FrozenSet[PlanKey]:
    return frozenset(PLAN_ORDER[PLAN_ORDER.index(lowest):])


# Free: docs/chat only. Starter+: schedule and extraction. Team+: media.
FEATURE_PLANS: Dict[Feature, FrozenSet[PlanKey]] = {
    Feature.chat: _from_tier(PlanKey.free),
    Feature.document_upload: _from_tier(PlanKey.free),
    Feature.scheduling: _from_tier(PlanKey.starter),
    Feature.extraction: _from_tier(PlanKey.starter),
    Feature.media_upload: _from_tier(PlanKey.team),
    Feature.email: frozenset({PlanKey.corporation}),
    Feature.spreadsheets: frozenset({PlanKey.corporation}),
}


class PlanLimits(BaseModel):
    """Per-plan quotas; None means unlimited"""

    daily_messages: int
    daily_uploads: Optional[int]
    max_users: Optional[int]  # billable members only (owner/admin excluded)
    max_bots: Optional[int]
    allow_images: bool
    allow_video: bool


PLAN_LIMITS: Dict[PlanKey, PlanLimits] = {
    PlanKey.free: PlanLimits(
        daily_messages=20, daily_uploads=5, max_users=1, max_bots=1,
        allow_images=False, allow_video=False,
    ),
    PlanKey.starter: PlanLimits(
        daily_messages=500, daily_uploads=None, max_users=5, max_bots=1,
        allow_images=False, allow_video=False,
    ),
    PlanKey.pro: PlanLimits(
        daily_messages=999999, daily_uploads=None, max_users=15, max_bots=3,
        allow_images=True, allow_video=True,
    ),
    PlanKey.team: PlanLimits(
        daily_messages=999999, daily_uploads=None, max_users=30, max_bots=4,
        allow_images=True, allow_video=True,
    ),
    PlanKey.enterprise: PlanLimits(
        daily_messages=999999, daily_uploads=None, max_users=50, max_bots=5,
        allow_images=True, allow_video=True,
    ),
    PlanKey.corporation: PlanLimits(
        daily_messages=999999, daily_uploads=None, max_users=100, max_bots=10,
        allow_images=True, allow_video=True,
    ),
}


class FeatureDecision(BaseModel):
    """Outcome of a plan gate check"""

    allowed: bool
    reason_code: str
    suggested_status: int
    feature: str
    plan: PlanKey


def normalize_plan(raw: Any) -> PlanKey:
    """Map any stored plan value to a PlanKey; unknown or empty means free"""
    try:
        return PlanKey(enum_text(raw))
    except ValueError:
        return PlanKey.free


def get_plan_limits(plan: Any) -> PlanLimits:
    return PLAN_LIMITS[normalize_plan(plan)]


def _to_feature(feature: Union[Feature, str]) -> Optional[Feature]:
    try:
        return Feature(enum_text(feature))
    except ValueError:
        return None


def has_feature(plan: Any, feature: Union[Feature, str]) -> bool:
    known = _to_feature(feature)
    if known is None:
        return False
    return normalize_plan(plan) in FEATURE_PLANS[known]


def require_feature(plan: Any, feature: Union[Feature, str]) -> FeatureDecision:
    """
    Decide whether a plan may use a feature.

    Every (plan, feature) pair has an answer:
    - allowed: ALLOWED / 200
    - known feature on a plan below its tier: FEATURE_NOT_ALLOWED / 402
    - unknown feature: FEATURE_NOT_ALLOWED / 403
    """
    plan_key = normalize_plan(plan)
    known = _to_feature(feature)
    name = known.value if known is not None else str(getattr(feature, "value", feature))

    if known is None:
        return FeatureDecision(
            allowed=False,
            reason_code=FEATURE_NOT_ALLOWED,
            suggested_status=403,
            feature=name,
            plan=plan_key,
        )

    if has_feature(plan_key, known):
        return FeatureDecision(
            allowed=True,
            reason_code=ALLOWED,
            suggested_status=200,
            feature=name,
            plan=plan_key,
        )

    return FeatureDecision(
        allowed=False,
        reason_code=FEATURE_NOT_ALLOWED,
        suggested_status=402,
        feature=name,
        plan=plan_key,
    )


def features_for(plan: Any) -> Dict[str, bool]:
    """Full feature map for a plan, e.g. for a /me response"""
    plan_key = normalize_plan(plan)
    return {feature.value: has_feature(plan_key, feature) for feature in FEATURE_PLANS}
