"""
Unit tests for AuthenticationService

Tests credential validation with a mocked UnitOfWork and a real
Argon2 hashing engine.
"""
import statistics
import time
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from pydantic import SecretStr
from sqlalchemy.exc import OperationalError

from newsletter.adapter.services.password_hashing import (
    FALLBACK_PASSWORD_HASH,
    compute_password_hash,
)
from newsletter.app.services.authentication import AuthenticationService, Credentials
from newsletter.domain.entities import User
from newsletter.domain.values import NewPassword
from newsletter.result import Return


def _credentials(username: str, password: str) -> Credentials:
    return Credentials(username=username, password=SecretStr(password))


@pytest.mark.asyncio
async def test_valid_credentials_return_user_id(mock_uow, hashing_engine, pepper):
    user_id = uuid4()
    stored = compute_password_hash("everythinghastostartsomewhere", pepper)
    mock_uow.users.get_credentials.return_value = (user_id, stored)

    service = AuthenticationService(mock_uow, hashing_engine)
    result = await service.validate_credentials(
        _credentials("admin", "everythinghastostartsomewhere")
    )

    assert result.is_ok()
    assert result.value == user_id
    mock_uow.users.get_credentials.assert_called_once_with("admin")


@pytest.mark.asyncio
async def test_wrong_password_is_invalid_credentials(mock_uow, hashing_engine, pepper):
    stored = compute_password_hash("everythinghastostartsomewhere", pepper)
    mock_uow.users.get_credentials.return_value = (uuid4(), stored)

    service = AuthenticationService(mock_uow, hashing_engine)
    result = await service.validate_credentials(
        _credentials("admin", "everythinghastostartsomewhera")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid username or password"


@pytest.mark.asyncio
async def test_unknown_username_still_verifies_fallback_hash(mock_uow):
    engine = AsyncMock()
    engine.verify = AsyncMock(return_value=Return.ok(None))
    mock_uow.users.get_credentials.return_value = None

    service = AuthenticationService(mock_uow, engine)
    result = await service.validate_credentials(_credentials("nobody", "whatever-password"))

    # Verification ran against the fallback hash...
    engine.verify.assert_awaited_once_with("whatever-password", FALLBACK_PASSWORD_HASH)
    # ...and even a "match" never authenticates
    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid username or password"


@pytest.mark.asyncio
async def test_storage_failure_is_unexpected_error(mock_uow, hashing_engine):
    failure = OperationalError("SELECT", {}, Exception("connection refused"))
    mock_uow.users.get_credentials.side_effect = failure

    service = AuthenticationService(mock_uow, hashing_engine)
    result = await service.validate_credentials(_credentials("admin", "whatever-password"))

    assert result.is_err()
    assert result.error.code == "UNEXPECTED_ERROR"
    assert result.error.cause is failure


@pytest.mark.asyncio
async def test_change_password_overwrites_hash_without_commit(mock_uow, hashing_engine):
    user = User(id=uuid4(), username="admin", email="admin@example.com", password_hash="old")
    mock_uow.users.get_by_id.return_value = user

    service = AuthenticationService(mock_uow, hashing_engine)
    new_password = NewPassword.parse(SecretStr("a-brand-new-password")).value
    result = await service.change_password(user.id, new_password)

    assert result.is_ok()
    assert user.password_hash.startswith("$argon2id$")
    assert (await hashing_engine.verify("a-brand-new-password", user.password_hash)).is_ok()
    mock_uow.users.update.assert_awaited_once_with(user)
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_change_password_for_missing_user_is_unexpected_error(mock_uow, hashing_engine):
    mock_uow.users.get_by_id.return_value = None

    service = AuthenticationService(mock_uow, hashing_engine)
    new_password = NewPassword.parse(SecretStr("a-brand-new-password")).value
    result = await service.change_password(uuid4(), new_password)

    assert result.is_err()
    assert result.error.code == "UNEXPECTED_ERROR"


@pytest.mark.slow
@pytest.mark.asyncio
async def test_unknown_username_takes_as_long_as_wrong_password(mock_uow, hashing_engine, pepper):
    """Latency must not reveal whether a username exists (sampled, not exact)."""
    stored = compute_password_hash("everythinghastostartsomewhere", pepper)
    known = (uuid4(), stored)
    service = AuthenticationService(mock_uow, hashing_engine)

    async def sample(credentials_row, rounds=15):
        durations = []
        for _ in range(rounds):
            mock_uow.users.get_credentials.return_value = credentials_row
            start = time.perf_counter()
            result = await service.validate_credentials(_credentials("admin", "wrong-password"))
            durations.append(time.perf_counter() - start)
            assert result.is_err()
        return statistics.median(durations)

    unknown_median = await sample(None)
    known_median = await sample(known)

    ratio = unknown_median / known_median
    assert 0.5 < ratio < 2.0
