"""
Authorization Gate

Resolves a session cookie into a tenant-scoped actor and enforces
role/status preconditions. Role, status and plan are read from storage
on every check, so demotions and blocks apply on the next request.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.domain.entities import (
    PlanKey,
    UserRole,
    UserStatus,
    normalize_role,
    normalize_status,
)
from tenantgate.libs.result import Error, Result, Return

from .plan_policy import normalize_plan
from .session_manager import read_session

logger = logging.getLogger(__name__)

UNAUTHENTICATED = "UNAUTHENTICATED"
FORBIDDEN_NOT_ACTIVE = "FORBIDDEN_NOT_ACTIVE"
FORBIDDEN_NOT_OWNER = "FORBIDDEN_NOT_OWNER"
STORAGE_ERROR = "STORAGE_ERROR"


class Actor(BaseModel):
    """Authorization-relevant identity, resolved fresh per request"""

    tenant_id: UUID
    user_id: UUID
    email: str
    role: UserRole
    status: UserStatus
    plan: PlanKey
    email_verified: bool = False


class AuthorizationGate:
    """
    Session-to-actor resolution with role/status enforcement.

    Business Rules:
    - No valid session, or no user row for it: UNAUTHENTICATED
    - Status other than active (pending, blocked): FORBIDDEN_NOT_ACTIVE
    - Owner-only operations additionally require role owner
    - Storage failures surface as STORAGE_ERROR, never as a denial
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def require_active_member(self, cookie_value: Optional[str]) -> Result[Actor]:
        identity = read_session(cookie_value)
        if identity is None:
            return Return.err(Error(UNAUTHENTICATED, "Authentication required"))

        try:
            async with self.uow:
                user = await self.uow.users.get_by_tenant_and_email(
                    identity.tenant_id, identity.email
                )
                if user is None:
                    logger.info(f"Authorization denied: no user row for tenant {identity.tenant_id}")
                    return Return.err(Error(UNAUTHENTICATED, "Authentication required"))

                tenant = await self.uow.tenants.get_by_id(identity.tenant_id)
                actor = Actor(
                    tenant_id=user.tenant_id,
                    user_id=user.id,
                    email=user.email,
                    role=normalize_role(user.role),
                    status=normalize_status(user.status),
                    plan=normalize_plan(tenant.plan if tenant is not None else None),
                    email_verified=bool(user.email_verified),
                )
        except SQLAlchemyError:
            logger.exception("Authorization lookup failed")
            return Return.err(Error(STORAGE_ERROR, "Storage unavailable"))

        if actor.status != UserStatus.active:
            logger.info(f"Authorization denied: user {actor.user_id} status={actor.status.value}")
            return Return.err(Error(FORBIDDEN_NOT_ACTIVE, "Access denied"))

        return Return.ok(actor)

    async def require_owner(self, cookie_value: Optional[str]) -> Result[Actor]:
        result = await self.require_active_member(cookie_value)
        if result.is_err():
            return result

        actor = result.value
        if actor.role != UserRole.owner:
            logger.info(f"Authorization denied: user {actor.user_id} role={actor.role.value}")
            return Return.err(Error(FORBIDDEN_NOT_OWNER, "Access denied"))

        return Return.ok(actor)
