"""
Argon2id password hashing with a process-wide pepper.

The hash input is the password bytes followed by the pepper bytes. Salts
are random per hash and embedded in the PHC string. Hashing parameters are
fixed: a stored hash encoded with any other parameters never verifies.
"""

import logging

from argon2 import Parameters, PasswordHasher, Type, extract_parameters
from argon2.exceptions import InvalidHashError, VerificationError
from pydantic import SecretStr

from newsletter.adapter.services.blocking_pool import BlockingWorkPool
from newsletter.result import Error, Result, Return

logger = logging.getLogger(__name__)

ARGON2_PARAMETERS = Parameters(
    type=Type.ID,
    version=19,
    salt_len=16,
    hash_len=32,
    time_cost=2,
    memory_cost=15000,
    parallelism=1,
)

# Verified when the username is unknown so that both paths cost the same.
# Generated with ARGON2_PARAMETERS; no known password matches it.
FALLBACK_PASSWORD_HASH = (
    "$argon2id$v=19$m=15000,t=2,p=1$"
    "gZiV/M1gPc22ElAH/Jh1Hw$"
    "CWOrkoo7oJBQ/iyh7uJ0LO2aLEfrHwTWllSAxT0zRno"
)

_HASHER = PasswordHasher.from_parameters(ARGON2_PARAMETERS)


def _invalid_credentials(cause: Exception = None) -> Result[None]:
    return Return.err(Error("INVALID_CREDENTIALS", "Invalid username or password", cause))


def _peppered(password: str, pepper: SecretStr) -> bytes:
    return password.encode() + pepper.get_secret_value().encode()


def compute_password_hash(password: str, pepper: SecretStr) -> str:
    """Hash a password into a self-describing PHC string."""
    return _HASHER.hash(_peppered(password, pepper))


def verify_password_hash(password: str, pepper: SecretStr, stored_hash: str) -> Result[None]:
    """
    Verify a password against a stored PHC string.

    Fails closed: an unparsable hash or one encoded with different
    parameters is reported as invalid credentials.
    """
    try:
        parameters = extract_parameters(stored_hash)
    except InvalidHashError as e:
        logger.warning("Stored password hash is not a valid Argon2 PHC string")
        return _invalid_credentials(e)

    if parameters != ARGON2_PARAMETERS:
        logger.warning("Stored password hash uses unexpected Argon2 parameters")
        return _invalid_credentials()

    try:
        _HASHER.verify(stored_hash, _peppered(password, pepper))
    except (VerificationError, InvalidHashError) as e:
        return _invalid_credentials(e)
    return Return.ok(None)


class PasswordHashingEngine:
    """
    Binds the pepper once and runs hashing on the blocking work pool.

    The pepper is injected at startup and held as a SecretStr so it never
    shows up in reprs or logs.
    """

    def __init__(self, pepper: SecretStr, pool: BlockingWorkPool):
        self._pepper = pepper
        self._pool = pool

    async def hash(self, password: str) -> str:
        return await self._pool.run(compute_password_hash, password, self._pepper)

    async def verify(self, password: str, stored_hash: str) -> Result[None]:
        return await self._pool.run(verify_password_hash, password, self._pepper, stored_hash)

    def __repr__(self) -> str:
        return "PasswordHashingEngine(pepper='**********')"
