import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenantgate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantgate.app.services.email_sender import IEmailSender
from tenantgate.depends import (
    get_email_sender,
    get_rate_limit_unit_of_work,
    get_unit_of_work,
)
from tests.fixtures.json_loader import TestDataLoader


class RecordingEmailSender(IEmailSender):
    """Keeps sent messages in memory instead of delivering them"""

    def __init__(self):
        self.sent = []

    async def send(self, to: str, subject: str, html: str) -> None:
        self.sent.append({"to": to, "subject": subject, "html": html})

    def last_token(self, to: str) -> str:
        message = [m for m in self.sent if m["to"] == to][-1]
        return message["html"].split("?token=")[1].split('"')[0]


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_outbox():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(db_session, session_factory, email_outbox):
    from tenantgate.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    async def override_get_rate_limit_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_rate_limit_unit_of_work] = override_get_rate_limit_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_outbox

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
