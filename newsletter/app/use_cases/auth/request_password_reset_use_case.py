"""
Request Password Reset Use Case

Issues a reset token and emails the reset link.
"""

import logging
from datetime import timedelta

from newsletter.app.services.email_client import IEmailClient
from newsletter.app.services.password_reset_tokens import (
    DEFAULT_TOKEN_LENGTH,
    DEFAULT_TOKEN_TTL,
    PasswordResetTokenManager,
)
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import SubscriberEmail
from newsletter.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If that email is in our system, we sent a reset link."


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Malformed email addresses are rejected
    - No email enumeration (same response for known and unknown emails)
    - Token row is committed before the email is sent
    - Exactly one email per request for a known address
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_client: IEmailClient,
        base_url: str,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        self.uow = uow
        self.email_client = email_client
        self.base_url = base_url.rstrip("/")
        self.token_length = token_length
        self.token_ttl = token_ttl

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Errors:
            - VALIDATION_ERROR: malformed email address
            - UNEXPECTED_ERROR: storage failure
            - EMAIL_TRANSIENT_FAILURE / EMAIL_PERMANENT_FAILURE: delivery failed
        """
        parsed = SubscriberEmail.parse(email)
        if parsed.is_err():
            return Return.err(parsed.error)
        user_email = parsed.value

        response = RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(str(user_email))

            if user is None:
                return Return.ok(response)

            token_manager = PasswordResetTokenManager(
                self.uow, token_length=self.token_length, token_ttl=self.token_ttl
            )
            issued = await token_manager.issue(user.id)
            if issued.is_err():
                return Return.err(issued.error)

            sent = await self._send_password_reset_email(user.username, user_email, issued.value)
            if sent.is_err():
                logger.error("Failed to send password reset email: %s", sent.error.code)
                return Return.err(
                    Error(sent.error.code, "Failed to send password reset email", sent.error.cause)
                )

            return Return.ok(response)

    async def _send_password_reset_email(
        self, username: str, email: SubscriberEmail, raw_token: str
    ) -> Result[None]:
        reset_link = f"{self.base_url}/password-reset/confirm?token={raw_token}"
        html_body = (
            f"Dear {username},<br />"
            f'Click <a href="{reset_link}">here</a> to reset your password.'
        )
        plain_body = f"Dear {username},\nVisit {reset_link} to reset your password."
        return await self.email_client.send_email(
            email, "Password Reset Request", html_body, plain_body
        )
