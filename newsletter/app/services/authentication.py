"""
Credential validation and password changes.

Validation always pays for one Argon2 verification, whether or not the
username exists, so response latency does not reveal which usernames are
registered.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from pydantic import SecretStr
from sqlalchemy.exc import SQLAlchemyError

from newsletter.adapter.services.password_hashing import (
    FALLBACK_PASSWORD_HASH,
    PasswordHashingEngine,
)
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import NewPassword, UserId
from newsletter.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass
class Credentials:
    """Username/password pair, held only for the duration of one check"""

    username: str
    password: SecretStr


class AuthenticationService:
    """
    Validates credentials against the users table.

    Business Rules:
    - Unknown usernames are verified against FALLBACK_PASSWORD_HASH
    - Only a user found in storage whose real hash verifies is authenticated
    - Bad username and bad password produce the same INVALID_CREDENTIALS error
    - change_password does not re-check the old password and does not commit
    """

    def __init__(self, uow: UnitOfWork, hashing_engine: PasswordHashingEngine):
        self.uow = uow
        self.hashing_engine = hashing_engine

    async def validate_credentials(self, credentials: Credentials) -> Result[UserId]:
        """
        Validate a username/password pair.

        Returns:
            Result with the UserId, or Error

        Errors:
            - INVALID_CREDENTIALS: unknown username or wrong password
            - UNEXPECTED_ERROR: storage failure
        """
        user_id = None
        expected_password_hash = FALLBACK_PASSWORD_HASH

        try:
            stored = await self.uow.users.get_credentials(credentials.username)
        except SQLAlchemyError as e:
            logger.exception("Failed to retrieve stored credentials")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to retrieve stored credentials", e)
            )

        if stored is not None:
            user_id, expected_password_hash = stored

        verification = await self.hashing_engine.verify(
            credentials.password.get_secret_value(), expected_password_hash
        )
        if verification.is_err():
            return Return.err(verification.error)

        # A match against the fallback hash must never authenticate
        if user_id is None:
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid username or password"))

        return Return.ok(UserId(user_id))

    async def change_password(self, user_id: UUID, new_password: NewPassword) -> Result[None]:
        """
        Hash and store a new password inside the caller's unit of work.

        Errors:
            - UNEXPECTED_ERROR: user missing or storage failure
        """
        password_hash = await self.hashing_engine.hash(new_password.expose())

        try:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("UNEXPECTED_ERROR", "User not found"))
            user.password_hash = password_hash
            await self.uow.users.update(user)
        except SQLAlchemyError as e:
            logger.exception("Failed to change the user's password in the database")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to change the user's password", e)
            )

        return Return.ok(None)
