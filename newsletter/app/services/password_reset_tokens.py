"""
Password reset token lifecycle: issue, validate, mark used.

Only the SHA-256 digest of a token is stored. Validation collapses every
failure (unknown, expired, already used) into INVALID_TOKEN.
"""

import hashlib
import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.clock import utc_now
from newsletter.domain.entities import PasswordResetToken
from newsletter.domain.values import (
    RESET_TOKEN_MAX_LENGTH,
    RESET_TOKEN_MIN_LENGTH,
    ResetToken,
    UserId,
)
from newsletter.result import Error, Result, Return

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 25
DEFAULT_TOKEN_TTL = timedelta(hours=1)

INVALID_TOKEN_MESSAGE = "Invalid or expired password reset token."


def hash_token(raw_token: str) -> str:
    """Return the SHA-256 hex digest of a raw token string."""
    return hashlib.sha256(raw_token.encode()).hexdigest()


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def invalid_token() -> Result:
    return Return.err(Error("INVALID_TOKEN", INVALID_TOKEN_MESSAGE))


class PasswordResetTokenManager:
    """
    Issues and consumes password reset tokens.

    Business Rules:
    - Tokens are alphanumeric and issued at a fixed configured length (16-32)
    - Tokens expire one hour after creation by default
    - A token can be marked used exactly once
    - mark_used does not commit: it joins the password change transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not RESET_TOKEN_MIN_LENGTH <= token_length <= RESET_TOKEN_MAX_LENGTH:
            raise ValueError(
                f"Reset token length must be between {RESET_TOKEN_MIN_LENGTH} "
                f"and {RESET_TOKEN_MAX_LENGTH}"
            )
        self.uow = uow
        self.token_length = token_length
        self.token_ttl = token_ttl
        self.clock = clock

    async def issue(self, user_id: UUID) -> Result[str]:
        """
        Create and persist a token for user_id, then commit.

        Returns:
            Result with the raw token (to be emailed, never stored), or Error
        """
        raw_token = generate_token(self.token_length)
        now = self.clock()

        try:
            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user_id,
                    token_hash=hash_token(raw_token),
                    created_at=now,
                    expires_at=now + self.token_ttl,
                )
            )
            await self.uow.commit()
        except SQLAlchemyError as e:
            logger.exception("Failed to store password reset token")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to store password reset token", e)
            )

        return Return.ok(raw_token)

    async def validate(self, token: ResetToken) -> Result[Tuple[UserId, str]]:
        """
        Look up an unused, unexpired token.

        Returns:
            Result with (user_id, token_hash), or Error

        Errors:
            - INVALID_TOKEN: unknown, expired or already used
            - UNEXPECTED_ERROR: storage failure
        """
        token_hash = hash_token(token.expose())

        try:
            reset_token = await self.uow.password_reset_tokens.get_valid_by_token_hash(
                token_hash, self.clock()
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to query password reset token")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to query password reset token", e)
            )

        if reset_token is None:
            return invalid_token()

        return Return.ok((UserId(reset_token.user_id), reset_token.token_hash))

    async def mark_used(self, token_hash: str) -> Result[None]:
        """
        Set used_at on the token. Only call after the password change succeeded.

        Errors:
            - INVALID_TOKEN: token was consumed concurrently
            - UNEXPECTED_ERROR: storage failure
        """
        try:
            updated = await self.uow.password_reset_tokens.mark_used(token_hash, self.clock())
        except SQLAlchemyError as e:
            logger.exception("Failed to mark password reset token as used")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to mark token as used", e)
            )

        if not updated:
            return invalid_token()

        return Return.ok(None)
