import pytest
from unittest.mock import AsyncMock, MagicMock

from pydantic import SecretStr

from newsletter.adapter.services.blocking_pool import BlockingWorkPool
from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.result import Return

TEST_PEPPER = SecretStr("unit-test-pepper")


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_credentials = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_valid_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)

    uow.idempotency = MagicMock()
    uow.idempotency.insert_placeholder = AsyncMock(return_value=True)
    uow.idempotency.get = AsyncMock(return_value=None)
    uow.idempotency.save_response = AsyncMock()

    uow.subscriptions = MagicMock()
    uow.subscriptions.get_confirmed_emails = AsyncMock(return_value=[])
    uow.subscriptions.create = AsyncMock(side_effect=lambda subscription: subscription)

    return uow


@pytest.fixture
def blocking_pool():
    pool = BlockingWorkPool(max_workers=2)
    yield pool
    pool.shutdown()


@pytest.fixture
def pepper():
    return TEST_PEPPER


@pytest.fixture
def hashing_engine(pepper, blocking_pool):
    return PasswordHashingEngine(pepper, blocking_pool)


@pytest.fixture
def mock_email_client():
    client = MagicMock()
    client.send_email = AsyncMock(return_value=Return.ok(None))
    return client
