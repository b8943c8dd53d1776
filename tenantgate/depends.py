from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenantgate.adapter.services.email_sender import LoggingEmailSender, ResendEmailSender
from tenantgate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantgate.api.error import ClientError, ServerError
from tenantgate.app.services.authorization_gate import Actor, AuthorizationGate
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.app.services.plan_policy import require_feature
from tenantgate.app.services.rate_limiter import (
    RATE_LIMITED,
    RateLimiter,
    rate_limit_key,
)
from tenantgate.app.services.unit_of_work import UnitOfWork
from tenantgate.libs.result import Error

# Import models so SQLModel.metadata knows every table
import tenantgate.domain.entities  # noqa: F401

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create missing tables. Idempotent; called once from the app lifespan."""
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_rate_limit_unit_of_work():
    # Separate session: the limiter commits independently of the request's work
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_email_sender() -> IEmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "resend":
        return ResendEmailSender(
            api_key=ApplicationConfig.RESEND_API_KEY,
            sender=ApplicationConfig.EMAIL_FROM,
        )
    return LoggingEmailSender()


def get_session_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def _raise_for_gate_error(error: Error):
    if error.code == "UNAUTHENTICATED":
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    elif error.code in ("FORBIDDEN_NOT_ACTIVE", "FORBIDDEN_NOT_OWNER"):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


async def require_active_member(
    cookie_value: Optional[str] = Depends(get_session_cookie),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Actor:
    """
    Dependency resolving the session cookie into an active actor.

    Raises:
        ClientError: 401 if unauthenticated, 403 if not active
        ServerError: 500 on storage failure
    """
    result = await AuthorizationGate(uow).require_active_member(cookie_value)
    if result.is_err():
        _raise_for_gate_error(result.error)
    return result.value


async def require_owner(
    cookie_value: Optional[str] = Depends(get_session_cookie),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Actor:
    """Dependency resolving the session cookie into an active owner"""
    result = await AuthorizationGate(uow).require_owner(cookie_value)
    if result.is_err():
        _raise_for_gate_error(result.error)
    return result.value


async def enforce_rate_limit(uow: UnitOfWork, key: str, limit: int, window_ms: int) -> None:
    """
    Count a request and raise 429 with Retry-After when over the limit.

    Storage failures fail closed with a 500.
    """
    result = await RateLimiter(uow).check(key, limit, window_ms)
    if result.is_err():
        raise ServerError(result.error)

    decision = result.value
    if not decision.allowed:
        raise ClientError(
            Error(RATE_LIMITED, "Too many requests, try again later"),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(decision.retry_after_seconds)},
        )


def rate_limit_by_ip(route: str, limit: Optional[int] = None):
    """Dependency factory limiting unauthenticated routes per client IP"""

    async def dependency(
        request: Request,
        uow: UnitOfWork = Depends(get_rate_limit_unit_of_work),
    ) -> None:
        await enforce_rate_limit(
            uow,
            rate_limit_key("ip", client_ip(request), route),
            limit or ApplicationConfig.RATE_LIMIT_AUTH_LIMIT,
            ApplicationConfig.RATE_LIMIT_WINDOW_MS,
        )

    return dependency


def rate_limit_by_actor(route: str, limit: Optional[int] = None, gate=require_active_member):
    """
    Dependency factory limiting authenticated routes per actor.

    gate resolves the actor first (require_active_member or require_owner),
    so unauthenticated requests are rejected before they are counted.
    """

    async def dependency(
        actor: Actor = Depends(gate),
        uow: UnitOfWork = Depends(get_rate_limit_unit_of_work),
    ) -> Actor:
        await enforce_rate_limit(
            uow,
            rate_limit_key("actor", str(actor.user_id), route),
            limit or ApplicationConfig.RATE_LIMIT_API_LIMIT,
            ApplicationConfig.RATE_LIMIT_WINDOW_MS,
        )
        return actor

    return dependency


def check_plan_feature(actor: Actor, feature: str) -> None:
    """Raise the decision's suggested status (402/403) when the plan lacks a feature"""
    decision = require_feature(actor.plan, feature)
    if not decision.allowed:
        raise ClientError(
            Error(decision.reason_code, f"Your plan does not include {decision.feature}"),
            status_code=decision.suggested_status,
        )
