from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from newsletter.adapter.services.blocking_pool import BlockingWorkPool
from newsletter.adapter.services.password_hashing import (
    PasswordHashingEngine,
    compute_password_hash,
)
from newsletter.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from newsletter.app.services.email_client import IEmailClient
from newsletter.depends import get_email_client, get_password_hashing_engine, get_unit_of_work
from newsletter.domain.entities import Subscription, SubscriptionStatus, User
from newsletter.domain.values import SubscriberEmail
from newsletter.result import Error, Result, Return

TEST_PEPPER = SecretStr("integration-test-pepper")


class RecordingEmailClient(IEmailClient):
    """Email client double recording every delivery; can be told to fail"""

    def __init__(self):
        self.sent: List[dict] = []
        self.failure: Optional[Error] = None

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> Result[None]:
        if self.failure is not None:
            return Return.err(self.failure)
        self.sent.append(
            {
                "to": str(recipient),
                "subject": subject,
                "html": html_content,
                "text": text_content,
            }
        )
        return Return.ok(None)


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


@pytest.fixture
def email_client():
    return RecordingEmailClient()


@pytest.fixture
def hashing_engine():
    pool = BlockingWorkPool(max_workers=2)
    yield PasswordHashingEngine(TEST_PEPPER, pool)
    pool.shutdown()


@pytest_asyncio.fixture
async def client(db_session, email_client, hashing_engine):
    from newsletter.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_client] = lambda: email_client
    app.dependency_overrides[get_password_hashing_engine] = lambda: hashing_engine

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(db_session):
    """Factory storing a user whose password is hashed with the test pepper"""

    async def _create_user(
        username: str = "admin",
        password: str = "everythinghastostartsomewhere",
        email: str = "admin@example.com",
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=compute_password_hash(password, TEST_PEPPER),
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def create_subscription(db_session):
    async def _create_subscription(
        email: str, status: SubscriptionStatus = SubscriptionStatus.confirmed
    ) -> Subscription:
        subscription = Subscription(email=email, name=email.split("@")[0], status=status)
        db_session.add(subscription)
        await db_session.commit()
        return subscription

    return _create_subscription


@pytest.fixture
def login(client):
    async def _login(username: str = "admin", password: str = "everythinghastostartsomewhere"):
        return await client.post("/login", json={"username": username, "password": password})

    return _login
