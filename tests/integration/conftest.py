from dataclasses import dataclass
from uuid import UUID

import bcrypt
import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from helpdesk.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from helpdesk.adapter.services.workflow_client import HttpWorkflowClient
from helpdesk.api.utils.jwt import identity_claims
from helpdesk.depends import get_unit_of_work
from helpdesk.domain.entities import AuditEvent, Role, Ticket, TicketPriority, User
from tests.fixtures.json_loader import SeedData

TEST_DB_URI = "sqlite+aiosqlite:///./test.db"


class IntegrationConfig(ApplicationConfig):
    DB_URI = TEST_DB_URI
    AUTO_CREATE_TABLES = False
    API_PREFIX = "/api"
    LOG_LEVEL = "WARNING"
    BCRYPT_ROUNDS = 4
    JWT_SECRET = "test-access-secret"
    JWT_REFRESH_SECRET = "test-refresh-secret"
    JWT_EXPIRES_IN = 900
    WORKFLOW_BASE_URL = "http://workflow.test"
    WEBHOOK_SECRET = "test-webhook-secret"


@pytest_asyncio.fixture
def test_data():
    return SeedData()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
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
def workflow_calls():
    """Requests received by the fake workflow engine"""
    return []


@pytest_asyncio.fixture
def workflow_status_code():
    return 200


@pytest_asyncio.fixture
async def app(db_session, workflow_calls, workflow_status_code):
    from helpdesk.api.app import create_app

    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    def handler(request: httpx.Request) -> httpx.Response:
        workflow_calls.append(request)
        return httpx.Response(workflow_status_code, json={"ok": True})

    app.state.workflow_client = HttpWorkflowClient(
        base_url=IntegrationConfig.WORKFLOW_BASE_URL,
        webhook_secret=IntegrationConfig.WEBHOOK_SECRET,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    yield app

    await app.state.audit_recorder.drain()
    await app.state.workflow_client.close()
    await app.state.database.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@dataclass(frozen=True)
class Seeded:
    """Plain snapshot of a seeded row; ORM instances expire on every request rollback"""

    id: UUID
    tenant_id: str
    email: str = ""
    password: str = ""
    role: Role = Role.user


@pytest_asyncio.fixture
async def users(db_session, test_data):
    """Seed every user of test_data.json; returns snapshots by key"""
    seeded = {}
    for key, data in test_data.users().items():
        password_hash = bcrypt.hashpw(data["password"].encode(), bcrypt.gensalt(4))
        user = User(
            tenant_id=data["tenant_id"],
            email=data["email"],
            password_hash=password_hash.decode(),
            role=Role(data["role"]),
            first_name=data["first_name"],
            last_name=data["last_name"],
        )
        db_session.add(user)
        seeded[key] = Seeded(
            id=user.id,
            tenant_id=user.tenant_id,
            email=user.email,
            password=data["password"],
            role=user.role,
        )
    await db_session.commit()
    return seeded


@pytest_asyncio.fixture
async def tickets(db_session, users, test_data):
    """One ticket in each tenant"""
    owners = {"logistics_ticket": users["logistics_user"], "retail_ticket": users["retail_user"]}
    seeded = {}
    for key, data in test_data.tickets().items():
        owner = owners[key]
        data["priority"] = TicketPriority(data["priority"])
        ticket = Ticket(tenant_id=owner.tenant_id, user_id=owner.id, **data)
        db_session.add(ticket)
        seeded[key] = Seeded(id=ticket.id, tenant_id=ticket.tenant_id)
    await db_session.commit()
    return seeded



@pytest_asyncio.fixture
def auth_headers(app):
    """Build an Authorization header for a seeded user"""

    def build(user: Seeded) -> dict:
        token = app.state.token_service.issue_access_token(
            identity_claims(user.tenant_id, user.role, str(user.id), user.email)
        )
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest_asyncio.fixture
def audit_events(app, db_session):
    """Drain the recorder, then return every stored audit event"""

    async def fetch():
        await app.state.audit_recorder.drain()
        result = await db_session.exec(select(AuditEvent))
        events = list(result.all())
        for event in events:
            db_session.expunge(event)
        return events

    return fetch
