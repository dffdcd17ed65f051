from datetime import timedelta

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.fakes import TEST_SECRET, FakeClock, RecordingMailDispatcher
from tests.fixtures.json_loader import PayloadLoader
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.mail_dispatcher import MailOutbox
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_tokens import ResetTokenProtocol
from src.app.services.session_tokens import SessionTokenIssuer
from src.depends import (
    get_mail_outbox,
    get_password_hasher,
    get_reset_token_protocol,
    get_session_token_issuer,
    get_unit_of_work,
)


@pytest_asyncio.fixture
def payloads():
    return PayloadLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest_asyncio.fixture
def session_tokens(clock):
    return SessionTokenIssuer(secret=TEST_SECRET, ttl=timedelta(minutes=60), clock=clock)


@pytest_asyncio.fixture
def reset_tokens(hasher, clock):
    return ResetTokenProtocol(process_secret=TEST_SECRET, hasher=hasher, clock=clock)


@pytest_asyncio.fixture
def mail_dispatcher():
    return RecordingMailDispatcher()


@pytest_asyncio.fixture
def outbox(mail_dispatcher):
    return MailOutbox(mail_dispatcher)


@pytest_asyncio.fixture
async def client(db_session, hasher, session_tokens, reset_tokens, outbox):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_session_token_issuer] = lambda: session_tokens
    app.dependency_overrides[get_reset_token_protocol] = lambda: reset_tokens
    app.dependency_overrides[get_mail_outbox] = lambda: outbox

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await outbox.drain()


@pytest_asyncio.fixture
async def registered(client, payloads):
    """Register the default account and return (payload, response body)"""
    payload = payloads.get("register_payload")
    response = await client.post("/register", json=payload)
    assert response.status_code == 200
    return payload, response.json()
