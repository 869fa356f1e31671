"""
Unit tests for Argon2id password hashing
"""
import pytest
from argon2 import PasswordHasher, extract_parameters
from pydantic import SecretStr

from newsletter.adapter.services.password_hashing import (
    ARGON2_PARAMETERS,
    FALLBACK_PASSWORD_HASH,
    compute_password_hash,
    verify_password_hash,
)

PEPPER = SecretStr("pepper-one")


def test_hash_uses_fixed_argon2id_parameters():
    stored = compute_password_hash("correct horse battery", PEPPER)

    assert stored.startswith("$argon2id$v=19$m=15000,t=2,p=1$")
    assert extract_parameters(stored) == ARGON2_PARAMETERS


def test_hash_is_salted():
    first = compute_password_hash("correct horse battery", PEPPER)
    second = compute_password_hash("correct horse battery", PEPPER)

    assert first != second


def test_verify_accepts_correct_password():
    stored = compute_password_hash("correct horse battery", PEPPER)

    assert verify_password_hash("correct horse battery", PEPPER, stored).is_ok()


@pytest.mark.parametrize(
    "attempt",
    ["correct horse batterz", "Correct horse battery", "correct horse battery ", "orrect horse battery"],
)
def test_verify_rejects_single_character_mutations(attempt):
    stored = compute_password_hash("correct horse battery", PEPPER)

    result = verify_password_hash(attempt, PEPPER, stored)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


def test_verify_rejects_different_pepper():
    stored = compute_password_hash("correct horse battery", PEPPER)

    result = verify_password_hash("correct horse battery", SecretStr("pepper-two"), stored)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


def test_verify_fails_closed_on_parameter_mismatch():
    # Same password and pepper, different memory cost
    weaker = PasswordHasher(time_cost=2, memory_cost=8192, parallelism=1)
    stored = weaker.hash(b"correct horse battery" + b"pepper-one")

    result = verify_password_hash("correct horse battery", PEPPER, stored)

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


def test_verify_rejects_unparsable_hash():
    result = verify_password_hash("anything", PEPPER, "not-a-phc-string")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


def test_fallback_hash_shares_engine_parameters():
    assert extract_parameters(FALLBACK_PASSWORD_HASH) == ARGON2_PARAMETERS


@pytest.mark.asyncio
async def test_engine_hashes_and_verifies_off_the_event_loop(hashing_engine):
    stored = await hashing_engine.hash("correct horse battery")

    assert (await hashing_engine.verify("correct horse battery", stored)).is_ok()
    assert (await hashing_engine.verify("wrong", stored)).is_err()


def test_engine_repr_masks_pepper(hashing_engine):
    assert "unit-test-pepper" not in repr(hashing_engine)
